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

"""Coverage data types.

Defines the blocks and profiles read from a Go cover profile, the
resolved color scheme used when rendering them, and the statement
weighted coverage percentage.
"""

from dataclasses import dataclass
from enum import Enum

from cover_annotate.errors import EmptyProfileError, MalformedProfileError


class CoverageStatus(Enum):
    """Coverage status of a block."""

    COVERED = "covered"  # Executed at least once
    NOT_COVERED = "not_covered"


class ProfileMode(str, Enum):
    """Counting mode recorded in the profile header."""

    SET = "set"
    COUNT = "count"
    ATOMIC = "atomic"


@dataclass(frozen=True)
class Block:
    """A half-open coverage range within one file.

    Lines and columns are 1-based; columns are byte offsets into the line.
    The end marker goes immediately before ``end_col``.
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    num_stmt: int
    count: int

    def __post_init__(self) -> None:
        if self.start_line < 1 or self.start_col < 1:
            raise MalformedProfileError(
                f"block starts before line 1 column 1: {self.start_line}.{self.start_col}"
            )
        if self.start_line > self.end_line or (
            self.start_line == self.end_line and self.start_col >= self.end_col
        ):
            raise MalformedProfileError(
                f"block ends before it starts: "
                f"{self.start_line}.{self.start_col},{self.end_line}.{self.end_col}"
            )

    @property
    def status(self) -> CoverageStatus:
        return CoverageStatus.COVERED if self.count > 0 else CoverageStatus.NOT_COVERED

    @property
    def is_single_line(self) -> bool:
        return self.start_line == self.end_line


@dataclass(frozen=True)
class Profile:
    """Coverage record for one source file."""

    file_name: str
    blocks: tuple[Block, ...] = ()
    mode: ProfileMode = ProfileMode.SET

    @property
    def total_statements(self) -> int:
        """Statements across all blocks."""
        return sum(block.num_stmt for block in self.blocks)

    @property
    def covered_statements(self) -> int:
        """Statements in blocks that executed at least once."""
        return sum(block.num_stmt for block in self.blocks if block.count > 0)

    @property
    def coverage_percent(self) -> float:
        """Statement coverage percentage."""
        return percentage(self)

    @property
    def last_line(self) -> int:
        """Highest line number referenced by any block."""
        return max((block.end_line for block in self.blocks), default=0)


@dataclass(frozen=True)
class ColorScheme:
    """Resolved escape sequences used when rendering.

    An empty string disables the corresponding marker.
    """

    header: str = ""
    cover: str = ""
    uncover: str = ""
    reset: str = ""

    @classmethod
    def plain(cls) -> "ColorScheme":
        """A scheme that emits no escape sequences at all."""
        return cls()

    def color_for(self, block: Block) -> str:
        if block.status == CoverageStatus.NOT_COVERED:
            return self.uncover
        return self.cover


@dataclass
class ProfileSummary:
    """One listing row: position, identifier and percentage."""

    index: int
    file_name: str
    percent: float


def percentage(profile: Profile) -> float:
    """Statement weighted coverage of a profile, in [0, 100].

    Blocks of empty function bodies carry no statements; a profile made
    only of those has nothing to cover and reports 0.0.

    Raises:
        EmptyProfileError: If the profile has no blocks
    """
    if not profile.blocks:
        raise EmptyProfileError(f"{profile.file_name}: profile has no blocks")
    total = profile.total_statements
    if total == 0:
        return 0.0
    return 100 * profile.covered_statements / total
