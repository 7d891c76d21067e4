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

"""Tests for profile selection and listing."""

import pytest

from cover_annotate.errors import SelectionError
from cover_annotate.protocol import Block, Profile
from cover_annotate.selection import is_match, list_profiles, select_profiles


@pytest.fixture
def profiles():
    return [
        Profile(file_name="a.go", blocks=(Block(1, 1, 1, 5, 4, 1), Block(2, 1, 2, 5, 1, 0))),
        Profile(file_name="b.go", blocks=(Block(1, 1, 1, 5, 1, 1), Block(2, 1, 2, 5, 1, 0))),
    ]


class TestIsMatch:
    """Tests for is_match."""

    def test_matches_index(self):
        assert is_match(2, "b.go", ["2"])

    def test_matches_file_name(self):
        assert is_match(2, "b.go", ["x.go", "b.go"])

    def test_index_must_be_exact_decimal(self):
        assert not is_match(2, "b.go", ["02", " 2", "2.0"])

    def test_file_name_must_be_exact(self):
        assert not is_match(1, "pkg/b.go", ["b.go"])


class TestSelectProfiles:
    """Tests for select_profiles."""

    def test_select_by_index_and_name_agree(self, profiles):
        assert select_profiles(profiles, ["2"]) == select_profiles(profiles, ["b.go"])
        assert select_profiles(profiles, ["2"]) == [(2, profiles[1])]

    def test_keeps_stored_order(self, profiles):
        selected = select_profiles(profiles, ["b.go", "1"])

        assert [index for index, _ in selected] == [1, 2]

    def test_profile_selected_once_per_match(self, profiles):
        assert select_profiles(profiles, ["1", "a.go"]) == [(1, profiles[0])]

    def test_colliding_identifiers_all_selected(self):
        twins = [
            Profile(file_name="dup.go", blocks=(Block(1, 1, 1, 2, 1, 1),)),
            Profile(file_name="dup.go", blocks=(Block(1, 1, 1, 2, 1, 0),)),
        ]

        assert [index for index, _ in select_profiles(twins, ["dup.go"])] == [1, 2]

    def test_no_match_raises(self, profiles):
        with pytest.raises(SelectionError, match="no files were found"):
            select_profiles(profiles, ["3", "c.go"])


class TestListProfiles:
    """Tests for list_profiles."""

    def test_lists_every_profile(self, profiles):
        summaries = list_profiles(profiles)

        assert [(s.index, s.file_name, s.percent) for s in summaries] == [
            (1, "a.go", 80.0),
            (2, "b.go", 50.0),
        ]

    def test_zero_statement_profile_lists_as_zero(self):
        profiles = [
            Profile(file_name="a.go", blocks=(Block(1, 1, 1, 5, 1, 1),)),
            Profile(file_name="init.go", blocks=(Block(3, 13, 3, 15, 0, 1),)),
        ]

        summaries = list_profiles(profiles)

        assert [(s.file_name, s.percent) for s in summaries] == [("a.go", 100.0), ("init.go", 0.0)]
