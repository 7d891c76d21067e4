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

"""Shared fixtures: a small Go workspace with a coverage profile."""

import pytest

A_GO = """\
package a

func A(x int) int {
\tif x > 0 {
\t\treturn 1
\t}
\treturn 0
}
"""

B_GO = """\
package b

func B() int { return 1 }

func C() int { return 2 }
"""

# a.go: 4 of 5 statements covered, b.go: 1 of 2
PROFILE = """\
mode: set
a.go:3.19,4.12 2 1
a.go:4.12,6.3 1 0
a.go:6.3,8.2 2 1
b.go:3.14,3.26 1 1
b.go:5.14,5.26 1 0
"""

B_GO_ANNOTATED = (
    b"<H>coverage b.go (50.00%)<R>\n"
    b"package b\n"
    b"\n"
    b"func B() int <C>{ return 1 }<R>\n"
    b"\n"
    b"func C() int <U>{ return 2 }<R>\n"
)


@pytest.fixture
def go_workspace(tmp_path, monkeypatch):
    """Sources and coverage.out in a temporary directory, GOPATH unset."""
    (tmp_path / "a.go").write_text(A_GO)
    (tmp_path / "b.go").write_text(B_GO)
    (tmp_path / "coverage.out").write_text(PROFILE)
    monkeypatch.delenv("GOPATH", raising=False)
    monkeypatch.delenv("GOROOT", raising=False)
    return tmp_path


@pytest.fixture
def b_go_annotated():
    """Expected rendering of b.go with <H>/<C>/<U>/<R> markers."""
    return B_GO_ANNOTATED
