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

"""Exceptions raised while loading, selecting and rendering coverage profiles."""


class CoverAnnotateError(Exception):
    """Base class for all cover-annotate failures."""

    exit_code: int = 1


class ConfigError(CoverAnnotateError):
    """Invalid settings, config file or color name."""


class ProfileLoadError(CoverAnnotateError):
    """The coverage profile could not be found or parsed."""


class SelectionError(CoverAnnotateError):
    """No profile matched any of the requested selectors."""

    exit_code = 2


class SourceNotFoundError(CoverAnnotateError):
    """The source file recorded in a profile could not be located."""

    def __init__(self, file_name: str):
        super().__init__(f"source file not found: {file_name}")
        self.file_name = file_name


class MalformedProfileError(CoverAnnotateError):
    """A profile does not agree with the source it was recorded against."""


class EmptyProfileError(MalformedProfileError):
    """A profile has no blocks to compute a percentage from."""


class TestRunError(CoverAnnotateError):
    """The test command used to produce a profile failed."""

    __test__ = False
