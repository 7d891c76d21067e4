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

"""Go coverage profile parser.

Reads the text format written by ``go test -coverprofile``::

    mode: set
    example.com/pkg/file.go:12.34,14.2 3 1

Each record is ``file:startLine.startCol,endLine.endCol numStmt count``.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from cover_annotate.errors import MalformedProfileError, ProfileLoadError
from cover_annotate.protocol import Block, Profile, ProfileMode

logger = logging.getLogger(__name__)

MODE_PREFIX = "mode: "

_RECORD_RE = re.compile(r"^(.+):([0-9]+)\.([0-9]+),([0-9]+)\.([0-9]+) ([0-9]+) ([0-9]+)$")


class GoCoverParser:
    """Parser for the Go coverage profile format."""

    def parse(self, file_path: Path) -> list[Profile]:
        """Parse a Go coverage profile file.

        Args:
            file_path: Path to the profile

        Returns:
            Profiles sorted by file name

        Raises:
            ProfileLoadError: If the file is missing or not a valid profile
        """
        if not file_path.is_file():
            raise ProfileLoadError(f"file not found: {file_path}")

        try:
            with open(file_path, encoding="utf-8") as f:
                profiles = self.parse_lines(f)
        except (OSError, UnicodeDecodeError) as e:
            raise ProfileLoadError(f"{file_path}: {e}") from e

        logger.info(f"Loaded {len(profiles)} profiles from {file_path}")
        return profiles

    def parse_lines(self, lines: Iterable[str]) -> list[Profile]:
        """Parse profile text already split into lines."""
        mode: Optional[ProfileMode] = None
        files: dict[str, list[Block]] = {}

        for line_no, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")

            if mode is None:
                mode = self._parse_mode(line)
                continue

            if not line.strip():
                continue

            # Concatenated profiles repeat the header
            if line.startswith(MODE_PREFIX):
                continue

            file_name, block = self._parse_record(line, line_no)
            files.setdefault(file_name, []).append(block)

        if mode is None:
            logger.warning("Coverage profile is empty")
            return []

        profiles = []
        for file_name in sorted(files):
            blocks = self._merge_blocks(file_name, files[file_name], mode)
            logger.debug(f"{file_name}: {len(blocks)} blocks")
            profiles.append(Profile(file_name=file_name, blocks=tuple(blocks), mode=mode))

        return profiles

    def _parse_mode(self, line: str) -> ProfileMode:
        if not line.startswith(MODE_PREFIX) or line == MODE_PREFIX:
            raise ProfileLoadError(f"bad mode line: {line}")
        try:
            return ProfileMode(line[len(MODE_PREFIX) :])
        except ValueError:
            raise ProfileLoadError(f"unknown profile mode: {line[len(MODE_PREFIX):]}") from None

    def _parse_record(self, line: str, line_no: int) -> tuple[str, Block]:
        match = _RECORD_RE.match(line)
        if match is None:
            raise ProfileLoadError(f"line {line_no} doesn't match expected format: {line}")

        file_name = match.group(1)
        start_line, start_col, end_line, end_col, num_stmt, count = map(int, match.groups()[1:])

        try:
            block = Block(
                start_line=start_line,
                start_col=start_col,
                end_line=end_line,
                end_col=end_col,
                num_stmt=num_stmt,
                count=count,
            )
        except MalformedProfileError as e:
            raise ProfileLoadError(f"line {line_no}: {e}") from e

        return file_name, block

    def _merge_blocks(self, file_name: str, blocks: list[Block], mode: ProfileMode) -> list[Block]:
        """Sort blocks by position and fold duplicates of the same range.

        Profiles from several test binaries list shared blocks more than
        once. In set mode the counts are OR-ed, otherwise they are summed.
        """
        ordered = sorted(blocks, key=lambda b: (b.start_line, b.start_col, b.end_line, b.end_col))
        merged: list[Block] = []

        for block in ordered:
            if merged:
                last = merged[-1]
                if (last.start_line, last.start_col, last.end_line, last.end_col) == (
                    block.start_line,
                    block.start_col,
                    block.end_line,
                    block.end_col,
                ):
                    if last.num_stmt != block.num_stmt:
                        raise ProfileLoadError(
                            f"{file_name}: inconsistent NumStmt: "
                            f"changed from {last.num_stmt} to {block.num_stmt}"
                        )
                    if mode == ProfileMode.SET:
                        count = last.count | block.count
                    else:
                        count = last.count + block.count
                    merged[-1] = Block(
                        start_line=last.start_line,
                        start_col=last.start_col,
                        end_line=last.end_line,
                        end_col=last.end_col,
                        num_stmt=last.num_stmt,
                        count=count,
                    )
                    continue
            merged.append(block)

        return merged


def parse_profiles(file_path: Path) -> list[Profile]:
    """Parse a Go coverage profile.

    Args:
        file_path: Path to coverage file

    Returns:
        Profiles sorted by file name
    """
    return GoCoverParser().parse(file_path)
