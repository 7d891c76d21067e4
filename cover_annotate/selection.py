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

"""Choosing which profiles to list or annotate.

A selector is either a profile's 1-based position in the profile, written
in decimal, or its exact file identifier.
"""

import logging
from typing import Iterable, Sequence

from cover_annotate.errors import SelectionError
from cover_annotate.protocol import Profile, ProfileSummary, percentage

logger = logging.getLogger(__name__)

NO_MATCH_MESSAGE = "no files were found according to the commandline arguments."


def is_match(index: int, file_name: str, selectors: Iterable[str]) -> bool:
    """Check whether a profile at ``index`` named ``file_name`` is selected."""
    number = str(index)
    return any(selector == number or selector == file_name for selector in selectors)


def select_profiles(
    profiles: Sequence[Profile],
    selectors: Sequence[str],
) -> list[tuple[int, Profile]]:
    """Pick the profiles to annotate, in stored order.

    Every matching profile is returned, including several profiles that
    share an identifier.

    Raises:
        SelectionError: If nothing matches
    """
    selected = [
        (index, profile)
        for index, profile in enumerate(profiles, start=1)
        if is_match(index, profile.file_name, selectors)
    ]
    if not selected:
        raise SelectionError(NO_MATCH_MESSAGE)

    logger.debug(f"Selected {len(selected)} of {len(profiles)} profiles")
    return selected


def list_profiles(profiles: Sequence[Profile]) -> list[ProfileSummary]:
    """Summarize every profile for listing; selectors play no part."""
    return [
        ProfileSummary(
            index=index,
            file_name=profile.file_name,
            percent=percentage(profile),
        )
        for index, profile in enumerate(profiles, start=1)
    ]
