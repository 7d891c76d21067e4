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

"""Settings for loading and rendering coverage profiles.

Settings come from three layers, later ones winning:

1. Go environment defaults (``$GOPATH`` and ``$GOROOT``)
2. An optional YAML config file
3. Command line flags

Example config file:

```yaml
profile_path: build/coverage.out
color_header: bold yellow
color_cover: green
color_uncover: red
color_mode: auto
search_paths:
  - /home/me/src
fallback_root: /usr/local/go/src
```
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cover_annotate.colors import build_color_scheme
from cover_annotate.errors import ConfigError
from cover_annotate.protocol import ColorScheme

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "coverage.out"


class ColorMode(str, Enum):
    """When to emit escape sequences."""

    ALWAYS = "always"
    AUTO = "auto"  # Only when writing to a terminal
    NEVER = "never"


class AnnotateSettings(BaseModel):
    """Resolved cover-annotate settings."""

    model_config = ConfigDict(extra="forbid")

    profile_path: Path = Field(default=Path(DEFAULT_PROFILE), description="Coverage profile")
    color_header: str = Field(default="yellow", description="Color for header lines")
    color_cover: str = Field(default="green", description="Color for covered code")
    color_uncover: str = Field(default="red", description="Color for code not covered")
    color_mode: ColorMode = Field(default=ColorMode.ALWAYS, description="When to use colors")
    search_paths: List[Path] = Field(
        default_factory=list, description="Directories searched for source files"
    )
    fallback_root: Optional[Path] = Field(
        default=None, description="Directory searched after all search paths"
    )
    test_command: Optional[List[str]] = Field(
        default=None, description="Command that writes the coverage profile"
    )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AnnotateSettings":
        """Build default settings following the Go workspace layout.

        Every ``$GOPATH`` entry contributes ``<entry>/src`` as a search path
        and ``$GOROOT/src`` becomes the fallback root.
        """
        environ = os.environ if environ is None else environ

        search_paths = [
            Path(entry) / "src" for entry in environ.get("GOPATH", "").split(os.pathsep) if entry
        ]
        goroot = environ.get("GOROOT", "")
        fallback_root = Path(goroot) / "src" if goroot else None

        return cls(search_paths=search_paths, fallback_root=fallback_root)

    @classmethod
    def from_yaml(cls, path: Path, base: Optional["AnnotateSettings"] = None) -> "AnnotateSettings":
        """Load settings from a YAML file.

        Args:
            path: Path to the YAML file
            base: Settings the file's values are layered over

        Raises:
            ConfigError: If the file cannot be read or holds invalid values
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"failed to load config {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a mapping at the top level")

        logger.debug(f"Loaded config from {path}: {sorted(data)}")
        return (base or cls()).merged(data)

    def merged(self, overrides: Mapping[str, Any]) -> "AnnotateSettings":
        """Return a copy with ``overrides`` applied; ``None`` values are ignored."""
        data = self.model_dump()
        data.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return AnnotateSettings.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"invalid settings: {e}") from e

    def resolved_test_command(self) -> List[str]:
        """Command used by ``--cover`` to produce the profile."""
        if self.test_command:
            return list(self.test_command)
        return ["go", "test", f"-coverprofile={self.profile_path}"]

    def color_scheme(self, is_tty: bool = True) -> ColorScheme:
        """Resolve configured colors into escape sequences.

        Args:
            is_tty: Whether output goes to a terminal (used by ``auto``)
        """
        if self.color_mode == ColorMode.NEVER or (
            self.color_mode == ColorMode.AUTO and not is_tty
        ):
            return ColorScheme.plain()
        return build_color_scheme(self.color_header, self.color_cover, self.color_uncover)
