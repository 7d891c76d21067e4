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

"""Annotated source views for Go coverage profiles.

Reads a ``go test -coverprofile`` profile and prints each file's source
with ANSI colors marking covered and uncovered code, or lists the files
in the profile with their statement coverage.

Package Structure:
    protocol.py    - Block, Profile and ColorScheme types, coverage percentage
    parser.py      - Go coverage profile parser
    annotator.py   - Inline marker insertion for source lines
    selection.py   - Choosing profiles by index or file name
    locator.py     - Finding source files on disk
    colors.py      - Color names to escape sequences
    config.py      - Settings from environment, YAML and flags
    visualizer.py  - Listing rows, headers and rendered files
    manager.py     - Orchestration of a full run
    cli.py         - Command line entry point

Usage:
    from cover_annotate import CoverageManager, parse_profiles

    profiles = parse_profiles(Path("coverage.out"))
    CoverageManager().annotate_files(profiles, ["1"], sys.stdout.buffer)
"""

__version__ = "1.0"

from cover_annotate.errors import (
    ConfigError,
    CoverAnnotateError,
    EmptyProfileError,
    MalformedProfileError,
    ProfileLoadError,
    SelectionError,
    SourceNotFoundError,
    TestRunError,
)
from cover_annotate.protocol import (
    Block,
    ColorScheme,
    CoverageStatus,
    Profile,
    ProfileMode,
    ProfileSummary,
    percentage,
)
from cover_annotate.parser import GoCoverParser, parse_profiles
from cover_annotate.annotator import LineAnnotator, group_blocks, splice
from cover_annotate.selection import is_match, list_profiles, select_profiles
from cover_annotate.locator import SourceLocator
from cover_annotate.colors import build_color_scheme, color_code
from cover_annotate.config import AnnotateSettings, ColorMode
from cover_annotate.visualizer import CoverageVisualizer
from cover_annotate.manager import CoverageManager

__all__ = [
    # Errors
    "ConfigError",
    "CoverAnnotateError",
    "EmptyProfileError",
    "MalformedProfileError",
    "ProfileLoadError",
    "SelectionError",
    "SourceNotFoundError",
    "TestRunError",
    # Protocol types
    "Block",
    "ColorScheme",
    "CoverageStatus",
    "Profile",
    "ProfileMode",
    "ProfileSummary",
    "percentage",
    # Parsing
    "GoCoverParser",
    "parse_profiles",
    # Annotation
    "LineAnnotator",
    "group_blocks",
    "splice",
    # Selection
    "is_match",
    "list_profiles",
    "select_profiles",
    # Sources and settings
    "SourceLocator",
    "build_color_scheme",
    "color_code",
    "AnnotateSettings",
    "ColorMode",
    # Output
    "CoverageVisualizer",
    "CoverageManager",
]
