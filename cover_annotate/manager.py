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

"""Coverage manager for orchestrating a cover-annotate run.

Loads the profile, optionally regenerates it by running the tests, and
writes listings or annotated sources to a binary stream.
"""

import logging
import subprocess
from typing import BinaryIO, Optional, Sequence

from cover_annotate.config import AnnotateSettings
from cover_annotate.errors import CoverAnnotateError, TestRunError
from cover_annotate.locator import SourceLocator
from cover_annotate.parser import GoCoverParser
from cover_annotate.protocol import ColorScheme, Profile
from cover_annotate.selection import list_profiles, select_profiles
from cover_annotate.visualizer import CoverageVisualizer

logger = logging.getLogger(__name__)


class CoverageManager:
    """High-level driver for listing and annotating coverage profiles.

    Handles:
    - Running tests to produce the profile
    - Parsing the profile
    - Listing files with their coverage
    - Writing annotated sources for selected files
    """

    def __init__(
        self,
        settings: Optional[AnnotateSettings] = None,
        colors: Optional[ColorScheme] = None,
        locator: Optional[SourceLocator] = None,
    ):
        """Initialize the coverage manager.

        Args:
            settings: Run settings (Go environment defaults if omitted)
            colors: Resolved colors (resolved from settings if omitted)
            locator: Source lookup (built from settings if omitted)
        """
        self.settings = settings or AnnotateSettings.from_env()
        self.colors = colors if colors is not None else self.settings.color_scheme()
        self.locator = locator or SourceLocator.from_settings(self.settings)
        self.parser = GoCoverParser()
        self.visualizer = CoverageVisualizer(colors=self.colors)

    def run_tests_with_coverage(self, command: Optional[Sequence[str]] = None) -> None:
        """Run the test command that writes the coverage profile.

        Raises:
            TestRunError: If the command cannot start or exits non-zero
        """
        command = list(command or self.settings.resolved_test_command())
        logger.info(f"Running tests: {' '.join(command)}")

        try:
            result = subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            raise TestRunError(f"failed to run {command[0]}: {e}") from e

        if result.returncode != 0:
            raise TestRunError(
                f"{' '.join(command)} exited with status {result.returncode}\n"
                f"{result.stdout}{result.stderr}".rstrip()
            )
        if result.stderr:
            logger.warning(f"Tests wrote to stderr: {result.stderr.strip()}")

    def load_profiles(self) -> list[Profile]:
        """Parse the configured coverage profile.

        Raises:
            ProfileLoadError: If the profile is missing or invalid
        """
        return self.parser.parse(self.settings.profile_path)

    def list_files(self, profiles: Sequence[Profile], output: BinaryIO) -> int:
        """Write one listing row per profile.

        Returns:
            Number of rows written
        """
        summaries = list_profiles(profiles)
        for summary in summaries:
            line = self.visualizer.format_list_entry(summary)
            output.write(line.encode("utf-8") + b"\n")
        return len(summaries)

    def annotate_files(
        self,
        profiles: Sequence[Profile],
        selectors: Sequence[str],
        output: BinaryIO,
    ) -> int:
        """Write annotated sources for every selected profile.

        Rendering stops at the first file that cannot be located or that
        does not match its profile; files before it have been written.

        Returns:
            Number of files written

        Raises:
            SelectionError: If no profile matches the selectors
            SourceNotFoundError: If a selected file cannot be located
            MalformedProfileError: If a profile does not fit its source
        """
        selected = select_profiles(profiles, selectors)

        for index, profile in selected:
            source_path = self.locator.find(profile.file_name)
            logger.debug(f"Annotating #{index} {profile.file_name} from {source_path}")
            try:
                rendered = self.visualizer.render_file(profile, source_path)
            except OSError as e:
                raise CoverAnnotateError(f"{source_path}: {e}") from e
            output.write(rendered)

        output.flush()
        return len(selected)
