"""Command-line front door for fuzzy_finder.

Reads candidate rows from a file or stdin, optionally splitting delimited
records, runs one interactive session on the controlling tty, and prints the
chosen rows to stdout.
"""

from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import TextIO

from .candidates import CandidateStore
from .config import FinderConfig, load_finder_config
from .errors import EmptyInputError, TerminalError
from .finder import run_store
from .session import Confirmed
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_SELECTION = 1
EXIT_ERROR = 2
EXIT_CANCELLED = 130
LOG_FORMAT = "%(levelname)s - %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _single_char(value: str) -> str:
    if value == "\\t":
        return "\t"
    if len(value) != 1:
        raise argparse.ArgumentTypeError("delimiter must be a single character")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fuzzy-finder",
        description="Interactively fuzzy-filter lines and print the chosen ones.",
    )
    parser.add_argument("path", nargs="?", default=None, help="File to read rows from. Defaults to stdin.")
    parser.add_argument("-d", "--delimiter", type=_single_char, default=None, help="Split rows into fields.")
    parser.add_argument(
        "-f",
        "--field",
        default="0",
        help="Field shown and matched when --delimiter is set: 0-based index, or a column name with --header.",
    )
    parser.add_argument("--header", action="store_true", help="Treat the first delimited row as column names.")
    parser.add_argument("-m", "--multi", action="store_true", default=None, help="Allow selecting several rows with TAB.")
    parser.add_argument("--height", type=_positive_int, default=None, help="Maximum number of result rows.")
    parser.add_argument("--prompt", default=None, help="Prompt shown before the query.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Derive colors from a Pygments style (e.g. monokai).")
    parser.add_argument("--no-color", action="store_true", help="Use reverse/bold only.")
    parser.add_argument("--print-index", action="store_true", help="Print 0-based row numbers instead of rows.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Log level used with --log-file.",
    )
    return parser


def configure_logging(log_file: Path | None, level: str) -> None:
    """Send package logs to ``log_file``; without one, logging stays silent."""
    if log_file is None:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("fuzzy_finder")
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def _resolve_field(field: str, header: list[str] | None) -> int:
    if field.isdigit():
        return int(field)
    if header is None:
        raise ValueError(f"field {field!r} is not an index; pass --header to select columns by name")
    try:
        return header.index(field)
    except ValueError:
        raise ValueError(f"unknown column {field!r}; header has {', '.join(header)}") from None


def read_rows(
    stream: TextIO,
    delimiter: str | None = None,
    field: str = "0",
    header: bool = False,
) -> list[tuple[str, str]]:
    """Return ``(display_text, source_line)`` pairs, one per input line.

    Without a delimiter the display text is the line itself. With one, each
    line is parsed as a CSV record and the chosen field is displayed; records
    too short for the field fall back to the whole line.
    """
    lines = stream.read().splitlines()
    if delimiter is None:
        return [(line, line) for line in lines]

    header_names: list[str] | None = None
    if header and lines:
        header_names = next(csv.reader([lines[0]], delimiter=delimiter))
        lines = lines[1:]
    index = _resolve_field(field, header_names)

    rows: list[tuple[str, str]] = []
    for line in lines:
        record = next(csv.reader([line], delimiter=delimiter), [])
        rows.append((record[index] if index < len(record) else line, line))
    return rows


def _merge_config(args: argparse.Namespace, defaults: FinderConfig) -> FinderConfig:
    return FinderConfig(
        multi_select=defaults.multi_select if args.multi is None else args.multi,
        visible_rows_override=args.height if args.height is not None else defaults.visible_rows_override,
        prompt=args.prompt if args.prompt is not None else defaults.prompt,
        theme=args.theme if args.theme is not None else defaults.theme,
        style=args.style if args.style is not None else defaults.style,
        no_color=args.no_color or defaults.no_color,
    )


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, run the finder, and return the process exit code.

    0 when something was chosen, 1 when nothing was (or input was empty),
    2 on errors, 130 when the user cancelled.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    try:
        if args.path is not None:
            with open(args.path, encoding="utf-8", errors="replace") as handle:
                rows = read_rows(handle, args.delimiter, args.field, args.header)
        elif sys.stdin.isatty():
            parser.error("no input: pass a file or pipe rows on stdin")
        else:
            rows = read_rows(sys.stdin, args.delimiter, args.field, args.header)
    except (OSError, ValueError) as exc:
        print(f"fuzzy-finder: {exc}", file=sys.stderr)
        return EXIT_ERROR

    config = _merge_config(args, load_finder_config())
    try:
        store = CandidateStore.from_items(rows)
        result = run_store(store, config)
    except EmptyInputError as exc:
        print(f"fuzzy-finder: {exc}", file=sys.stderr)
        return EXIT_NO_SELECTION
    except TerminalError as exc:
        logger.error("Terminal failure: %s", exc)
        print(f"fuzzy-finder: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if not isinstance(result, Confirmed):
        return EXIT_CANCELLED
    if not result.candidate_ids:
        return EXIT_NO_SELECTION
    for candidate_id in result.candidate_ids:
        if args.print_index:
            print(candidate_id)
        else:
            print(store.get(candidate_id).payload)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
