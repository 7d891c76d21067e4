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

"""Inline coverage annotation of source lines.

Blocks are grouped by the lines they start and end on. For every source
line touched by a block, color markers are inserted at the block's start
column and reset markers at its end column. Columns are byte offsets, so
lines are handled as ``bytes`` throughout and multi-byte characters are
never split differently from how the profile counted them.

Markers landing on the same offset are concatenated in block order, e.g.
the reset of one block followed by the color of the adjacent one.
Overlapping blocks are not balanced: a line may read
``color color ... reset reset``.
"""

import logging
from typing import Iterable, Iterator

from cover_annotate.errors import MalformedProfileError
from cover_annotate.protocol import Block, ColorScheme, Profile

logger = logging.getLogger(__name__)


def strip_line_ending(line: bytes) -> bytes:
    """Drop a trailing ``\\n`` and one ``\\r`` before it."""
    if line.endswith(b"\n"):
        line = line[:-1]
    if line.endswith(b"\r"):
        line = line[:-1]
    return line


def group_blocks(profile: Profile) -> dict[int, list[Block]]:
    """Map line numbers to the blocks starting or ending on them.

    A multi-line block is listed under both its start and end line; a
    single-line block is listed once and supplies both markers there.
    """
    lines: dict[int, list[Block]] = {}
    for block in profile.blocks:
        if not block.is_single_line:
            lines.setdefault(block.start_line, []).append(block)
        lines.setdefault(block.end_line, []).append(block)
    return lines


def splice(line: bytes, markers: dict[int, bytes]) -> bytes:
    """Insert markers into a line at their byte offsets.

    Edits are taken from the highest offset down, so every segment is cut
    from the unmodified line; the pieces are then joined in one pass.
    """
    parts: list[bytes] = []
    end = len(line)
    for offset in sorted(markers, reverse=True):
        parts.append(line[offset:end])
        parts.append(markers[offset])
        end = offset
    parts.append(line[:end])
    parts.reverse()
    return b"".join(parts)


class LineAnnotator:
    """Renders a profile's source with inline coverage markers."""

    def __init__(self, colors: ColorScheme):
        """Initialize the annotator.

        Args:
            colors: Escape sequences used for markers
        """
        self.colors = colors
        self._reset = colors.reset.encode("ascii")

    def line_markers(self, line_no: int, blocks: Iterable[Block]) -> dict[int, bytes]:
        """Accumulate the markers for one line, keyed by 0-based byte offset."""
        markers: dict[int, bytes] = {}
        for block in blocks:
            if line_no == block.end_line:
                offset = block.end_col - 1
                markers[offset] = markers.get(offset, b"") + self._reset
            if line_no == block.start_line:
                offset = block.start_col - 1
                color = self.colors.color_for(block).encode("ascii")
                markers[offset] = markers.get(offset, b"") + color
        return markers

    def annotate_line(
        self,
        file_name: str,
        line_no: int,
        line: bytes,
        blocks: Iterable[Block],
    ) -> bytes:
        """Annotate a single line (without its line ending).

        Raises:
            MalformedProfileError: If a marker falls outside the line
        """
        markers = self.line_markers(line_no, blocks)
        for offset in markers:
            if offset < 0 or offset > len(line):
                raise MalformedProfileError(
                    f"{file_name}:{line_no}: column {offset + 1} is outside the line "
                    f"({len(line)} bytes); the profile does not match the source"
                )
        return splice(line, markers)

    def annotate(self, profile: Profile, source_lines: Iterable[bytes]) -> Iterator[bytes]:
        """Yield annotated source lines without line endings.

        Args:
            profile: Coverage profile for the file
            source_lines: The file's raw lines, consumed once in order

        Raises:
            MalformedProfileError: If a block lies outside the source text
        """
        grouped = group_blocks(profile)
        logger.debug(f"{profile.file_name}: {len(grouped)} annotated lines")

        # line_no is the 1-based number of the line being produced
        line_no = 0
        for line_no, raw_line in enumerate(source_lines, start=1):
            line = strip_line_ending(raw_line)
            blocks = grouped.get(line_no)
            if blocks:
                line = self.annotate_line(profile.file_name, line_no, line, blocks)
            yield line

        if profile.last_line > line_no:
            raise MalformedProfileError(
                f"{profile.file_name}: profile refers to line {profile.last_line} "
                f"but the source has {line_no} lines"
            )
