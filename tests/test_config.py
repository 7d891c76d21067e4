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

"""Tests for cover-annotate settings."""

import os
from pathlib import Path

import pytest

from cover_annotate.config import AnnotateSettings, ColorMode
from cover_annotate.errors import ConfigError
from cover_annotate.protocol import ColorScheme


class TestAnnotateSettings:
    """Tests for AnnotateSettings."""

    def test_defaults(self):
        settings = AnnotateSettings()

        assert settings.profile_path == Path("coverage.out")
        assert settings.color_header == "yellow"
        assert settings.color_cover == "green"
        assert settings.color_uncover == "red"
        assert settings.color_mode == ColorMode.ALWAYS
        assert settings.search_paths == []
        assert settings.fallback_root is None

    def test_from_env(self):
        environ = {
            "GOPATH": os.pathsep.join(["/home/me/go", "", "/opt/go"]),
            "GOROOT": "/usr/local/go",
        }
        settings = AnnotateSettings.from_env(environ)

        assert settings.search_paths == [Path("/home/me/go/src"), Path("/opt/go/src")]
        assert settings.fallback_root == Path("/usr/local/go/src")

    def test_from_empty_env(self):
        settings = AnnotateSettings.from_env({})

        assert settings.search_paths == []
        assert settings.fallback_root is None

    def test_merged_ignores_none(self):
        settings = AnnotateSettings().merged({"color_cover": None, "color_uncover": "magenta"})

        assert settings.color_cover == "green"
        assert settings.color_uncover == "magenta"

    def test_merged_rejects_bad_values(self):
        with pytest.raises(ConfigError):
            AnnotateSettings().merged({"color_mode": "sometimes"})

    def test_from_yaml(self, tmp_path):
        config = tmp_path / "cover.yaml"
        config.write_text(
            "profile_path: build/coverage.out\n"
            "color_mode: never\n"
            "search_paths:\n"
            "  - /src/one\n"
        )
        base = AnnotateSettings(fallback_root=Path("/goroot/src"))

        settings = AnnotateSettings.from_yaml(config, base=base)

        assert settings.profile_path == Path("build/coverage.out")
        assert settings.color_mode == ColorMode.NEVER
        assert settings.search_paths == [Path("/src/one")]
        assert settings.fallback_root == Path("/goroot/src")

    def test_empty_yaml(self, tmp_path):
        config = tmp_path / "cover.yaml"
        config.write_text("")

        assert AnnotateSettings.from_yaml(config) == AnnotateSettings()

    def test_yaml_unknown_key(self, tmp_path):
        config = tmp_path / "cover.yaml"
        config.write_text("colour_cover: green\n")

        with pytest.raises(ConfigError):
            AnnotateSettings.from_yaml(config)

    def test_yaml_not_a_mapping(self, tmp_path):
        config = tmp_path / "cover.yaml"
        config.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="mapping"):
            AnnotateSettings.from_yaml(config)

    def test_yaml_syntax_error(self, tmp_path):
        config = tmp_path / "cover.yaml"
        config.write_text("color_cover: [unclosed\n")

        with pytest.raises(ConfigError):
            AnnotateSettings.from_yaml(config)

    def test_missing_yaml(self, tmp_path):
        with pytest.raises(ConfigError):
            AnnotateSettings.from_yaml(tmp_path / "missing.yaml")

    def test_default_test_command(self):
        settings = AnnotateSettings(profile_path=Path("out/cover.out"))

        assert settings.resolved_test_command() == [
            "go",
            "test",
            f"-coverprofile={Path('out/cover.out')}",
        ]

    def test_custom_test_command(self):
        settings = AnnotateSettings(test_command=["make", "cover"])

        assert settings.resolved_test_command() == ["make", "cover"]


class TestColorScheme:
    """Tests for resolving the color scheme from settings."""

    def test_always(self):
        scheme = AnnotateSettings().color_scheme(is_tty=False)

        assert scheme.cover == "\x1b[32m"
        assert scheme.reset == "\x1b[0m"

    def test_never(self):
        settings = AnnotateSettings(color_mode=ColorMode.NEVER)

        assert settings.color_scheme(is_tty=True) == ColorScheme.plain()

    def test_auto_follows_terminal(self):
        settings = AnnotateSettings(color_mode=ColorMode.AUTO)

        assert settings.color_scheme(is_tty=False) == ColorScheme.plain()
        assert settings.color_scheme(is_tty=True).uncover == "\x1b[31m"

    def test_invalid_color_name(self):
        settings = AnnotateSettings(color_cover="chartreuse-ish")

        with pytest.raises(ConfigError):
            settings.color_scheme()
