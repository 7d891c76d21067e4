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

"""Source file lookup for recorded profile identifiers."""

import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional

from cover_annotate.config import AnnotateSettings
from cover_annotate.errors import SourceNotFoundError

logger = logging.getLogger(__name__)


class SourceLocator:
    """Resolves a profile's file identifier to a readable path.

    Identifiers are import paths such as ``example.com/pkg/file.go``, so they
    are tried under each search path, then under the fallback root, and
    finally relative to the working directory.
    """

    def __init__(
        self,
        search_paths: Optional[Iterable[Path]] = None,
        fallback_root: Optional[Path] = None,
    ):
        self.search_paths = list(search_paths or [])
        self.fallback_root = fallback_root

    @classmethod
    def from_settings(cls, settings: AnnotateSettings) -> "SourceLocator":
        return cls(search_paths=settings.search_paths, fallback_root=settings.fallback_root)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SourceLocator":
        """Locator for the Go workspace: $GOPATH entries, then $GOROOT."""
        return cls.from_settings(AnnotateSettings.from_env(environ))

    def candidates(self, name: str) -> list[Path]:
        """Paths tried for ``name``, in lookup order."""
        paths = [search_path / name for search_path in self.search_paths]
        if self.fallback_root is not None:
            paths.append(self.fallback_root / name)
        paths.append(Path(name))
        return paths

    def find(self, name: str) -> Path:
        """Locate the source for a file identifier.

        Raises:
            SourceNotFoundError: If no candidate exists
        """
        for candidate in self.candidates(name):
            if candidate.exists():
                logger.debug(f"Resolved {name} to {candidate}")
                return candidate
        raise SourceNotFoundError(name)
