# Copyright 2025 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Terminal output for coverage profiles.

Formats listing rows and per-file headers, and renders a profile's
source through the line annotator.
"""

import logging
from pathlib import Path
from typing import Optional

from cover_annotate.annotator import LineAnnotator
from cover_annotate.protocol import ColorScheme, Profile, ProfileSummary, percentage

logger = logging.getLogger(__name__)


class CoverageVisualizer:
    """Generates listings and annotated source views."""

    def __init__(self, colors: Optional[ColorScheme] = None):
        """Initialize the visualizer.

        Args:
            colors: Escape sequences to use; no colors when omitted
        """
        self.colors = colors or ColorScheme.plain()
        self.annotator = LineAnnotator(self.colors)

    def format_list_entry(self, summary: ProfileSummary) -> str:
        """One listing row: index, colored identifier and percentage."""
        return (
            f"{summary.index:5d} {self.colors.header}{summary.file_name}{self.colors.reset} "
            f"({summary.percent:.2f}%)"
        )

    def format_header(self, profile: Profile) -> str:
        """Header printed above an annotated file."""
        return (
            f"{self.colors.header}coverage {profile.file_name} "
            f"({percentage(profile):.2f}%){self.colors.reset}"
        )

    def render_file(self, profile: Profile, source_path: Path) -> bytes:
        """Render a profile's header and annotated source.

        The whole file is rendered before anything is returned, so a
        malformed profile never yields partial output.

        Args:
            profile: Coverage profile for the file
            source_path: Located source file

        Returns:
            Header and annotated lines, each terminated by a newline
        """
        header = self.format_header(profile)
        with open(source_path, "rb") as f:
            lines = list(self.annotator.annotate(profile, f))

        logger.debug(f"Rendered {len(lines)} lines of {source_path}")
        body = b"".join(line + b"\n" for line in lines)
        return header.encode("utf-8") + b"\n" + body
