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

"""Command line interface.

Usage:
    cover-annotate [-l] [-c]
    cover-annotate [options] (FILE-NUMBER|FILENAME)...
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from cover_annotate import __version__
from cover_annotate.config import AnnotateSettings, ColorMode
from cover_annotate.errors import CoverAnnotateError
from cover_annotate.manager import CoverageManager

logger = logging.getLogger(__name__)

DEFAULT_PROG = "cover-annotate"

DESCRIPTION = """\
Reads the coverage profile and shows annotated source code. You can
create a coverage profile, list the files in it and then get highlighted
source code.
"""


def program_name() -> str:
    name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""
    if not name or name == "__main__.py":
        return DEFAULT_PROG
    return name


def build_parser(prog: str = DEFAULT_PROG) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        usage="%(prog)s [-l] [-c]\n   or: %(prog)s [options] (FILE-NUMBER|FILENAME)...",
        description=DESCRIPTION,
        epilog="Report bugs to author.",
    )
    parser.add_argument(
        "selectors",
        nargs="*",
        metavar="FILE-NUMBER|FILENAME",
        help="Files to annotate, by position in the listing or by name.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s version {__version__}",
        help="Output version information and exit.",
    )
    parser.add_argument(
        "-l", "--list", action="store_true", help="List files in the coverage profile."
    )
    parser.add_argument(
        "-c", "--cover", action="store_true", help="Run the tests with coverage first."
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="profile_path",
        type=Path,
        help="The coverage profile. Defaults to 'coverage.out'.",
    )
    parser.add_argument("--color-header", help="Set color for header. Defaults to 'yellow'.")
    parser.add_argument(
        "--color-cover", help="Set color for covered code. Defaults to 'green'."
    )
    parser.add_argument(
        "--color-uncover", help="Set color for not covered code. Defaults to 'red'."
    )
    parser.add_argument(
        "--color",
        dest="color_mode",
        choices=[mode.value for mode in ColorMode],
        help="When to use terminal colors. Defaults to 'always'.",
    )
    parser.add_argument(
        "-I",
        "--search-path",
        dest="search_paths",
        action="append",
        type=Path,
        help="Look for source files in this directory, before $GOPATH. "
        "May be given more than once.",
    )
    parser.add_argument("--config", type=Path, help="Read settings from this YAML file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging.")
    return parser


def setup_logging(verbose: bool) -> None:
    handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def load_settings(args: argparse.Namespace) -> AnnotateSettings:
    """Layer config file values and flags over the Go environment defaults."""
    settings = AnnotateSettings.from_env()
    if args.config is not None:
        settings = AnnotateSettings.from_yaml(args.config, base=settings)

    settings = settings.merged(
        {
            "profile_path": args.profile_path,
            "color_header": args.color_header,
            "color_cover": args.color_cover,
            "color_uncover": args.color_uncover,
            "color_mode": args.color_mode,
        }
    )
    if args.search_paths:
        settings = settings.merged({"search_paths": args.search_paths + settings.search_paths})
    return settings


def main(argv: Optional[list[str]] = None) -> int:
    """Run cover-annotate and return the exit status."""
    prog = program_name()
    parser = build_parser(prog)
    args = parser.parse_intermixed_args(argv)
    setup_logging(args.verbose)

    errors = Console(stderr=True, highlight=False, markup=False, emoji=False, soft_wrap=True)
    output = sys.stdout.buffer

    try:
        settings = load_settings(args)
        manager = CoverageManager(settings, colors=settings.color_scheme(output.isatty()))

        if args.cover:
            manager.run_tests_with_coverage()
            if not args.list:
                return 0

        if not args.list and not args.selectors:
            errors.print(f"{prog}: Error: more arguments required.")
            parser.print_usage(sys.stderr)
            return 2

        profiles = manager.load_profiles()

        if args.list:
            manager.list_files(profiles, output)
        else:
            manager.annotate_files(profiles, args.selectors, output)

    except CoverAnnotateError as e:
        output.flush()
        errors.print(f"{prog}: Error: {e}")
        return e.exit_code

    return 0


if __name__ == "__main__":
    sys.exit(main())
