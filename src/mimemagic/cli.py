"""Command-line entry point for listing a magic database.

Examples::

    mimemagic                       # decode the system database
    mimemagic ./magic --with-mask   # decode a specific file, print masks
    mimemagic --json --filetype 'image/*'
    mimemagic --summary
"""

from __future__ import annotations

import argparse
import fnmatch
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .core.errors import DecodeError, MagicIOError
from .core.types import Section
from .database import DATABASE_ENV, read_sections
from .reporting.json_lines import write_json_lines
from .reporting.summary import summarise_sections
from .reporting.text import write_text

_DEBUG_FORMAT = "%(filename)s:%(lineno)d: %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mimemagic",
        description="List the signatures stored in a shared-mime-info magic database.",
    )
    parser.add_argument(
        "database",
        nargs="?",
        type=Path,
        default=None,
        help=(
            "Magic database to decode (default: $"
            f"{DATABASE_ENV}, then the XDG data directories)."
        ),
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Log decoder progress to stderr.",
    )
    parser.add_argument(
        "-m",
        "--with-mask",
        dest="show_mask",
        action="store_true",
        help="Print the mask of every rule.",
    )
    parser.add_argument(
        "-s",
        "--value-as-string",
        dest="value_as_string",
        action="store_true",
        help="Print values as quoted strings instead of hex bytes.",
    )
    parser.add_argument(
        "--filetype",
        action="append",
        dest="filetypes",
        default=[],
        help="Only list sections whose filetype matches this glob (repeatable).",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON lines instead of the text listing.",
    )
    output.add_argument(
        "--summary",
        action="store_true",
        help="Emit aggregate statistics as JSON instead of the listing.",
    )
    return parser


def _configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(level=logging.DEBUG, format=_DEBUG_FORMAT, stream=sys.stderr)


def _filter_sections(sections: Sequence[Section], patterns: Sequence[str]) -> List[Section]:
    if not patterns:
        return list(sections)
    return [
        section
        for section in sections
        if any(fnmatch.fnmatchcase(section.filetype, pattern) for pattern in patterns)
    ]


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.debug)

    try:
        sections = read_sections(args.database)
    except FileNotFoundError as exc:
        parser.error(str(exc))
        return 2
    except (DecodeError, MagicIOError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1

    selected = _filter_sections(sections, args.filetypes)

    if args.summary:
        sys.stdout.write(json.dumps(summarise_sections(selected), indent=2, sort_keys=True))
        sys.stdout.write("\n")
    elif args.json:
        write_json_lines(selected, sys.stdout)
    else:
        write_text(
            selected,
            sys.stdout,
            show_mask=args.show_mask,
            value_as_string=args.value_as_string,
        )
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())


def console_main() -> None:
    """Entry point for the ``mimemagic`` console script."""

    sys.exit(main())
