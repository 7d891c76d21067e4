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

"""Color name resolution.

Turns style definitions such as ``"green"``, ``"bold red"`` or
``"white on blue"`` into raw ANSI escape sequences using rich's style
parser.
"""

import logging

from rich.errors import StyleSyntaxError
from rich.style import Style

from cover_annotate.errors import ConfigError
from cover_annotate.protocol import ColorScheme

logger = logging.getLogger(__name__)

ANSI_RESET = "\x1b[0m"

# SGR codes for the style attributes rich can parse
_ATTRIBUTE_CODES = (
    ("bold", "1"),
    ("dim", "2"),
    ("italic", "3"),
    ("underline", "4"),
    ("blink", "5"),
    ("reverse", "7"),
    ("strike", "9"),
)


def color_code(definition: str) -> str:
    """Resolve a style definition to an ANSI escape sequence.

    Args:
        definition: Style such as "yellow" or "bold red"; empty disables color

    Returns:
        Escape sequence, or "" for an empty definition

    Raises:
        ConfigError: If rich cannot parse the definition
    """
    definition = definition.strip()
    if not definition:
        return ""
    if definition == "reset":
        return ANSI_RESET

    try:
        style = Style.parse(definition)
    except StyleSyntaxError as e:
        raise ConfigError(f"invalid color {definition!r}: {e}") from e

    codes: list[str] = [code for attr, code in _ATTRIBUTE_CODES if getattr(style, attr)]
    if style.color is not None:
        codes.extend(style.color.get_ansi_codes(foreground=True))
    if style.bgcolor is not None:
        codes.extend(style.bgcolor.get_ansi_codes(foreground=False))

    if not codes:
        return ""
    return f"\x1b[{';'.join(codes)}m"


def build_color_scheme(header: str, cover: str, uncover: str) -> ColorScheme:
    """Resolve the three configurable colors into a scheme."""
    scheme = ColorScheme(
        header=color_code(header),
        cover=color_code(cover),
        uncover=color_code(uncover),
        reset=ANSI_RESET,
    )
    logger.debug(f"Resolved colors: {scheme!r}")
    return scheme
