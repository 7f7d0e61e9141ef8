"""Command-line interface for SheetSift."""

import argparse
import logging
import sys
from typing import Optional, TextIO

from .config import settings
from .errors import ExtractionError
from .extract import (
    HeaderDriven,
    OutputOptions,
    RegionExtractor,
    StructuralOnly,
    export_all_sheets,
    parse_separator,
    write_rows,
)
from .grid import ForcedBounds, list_sheets, open_grid

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Send log records to stderr so stdout stays clean for table output."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def parse_alias(value: str) -> tuple[str, str]:
    """Parse an ``ALIAS=FIELD`` pair."""
    alias, sep, field = value.partition("=")
    if not sep or not alias.strip() or not field.strip():
        raise argparse.ArgumentTypeError(f"Expected ALIAS=FIELD, got '{value}'")
    return alias.strip().lower(), field.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SheetSift - locate and extract data tables from spreadsheets"
    )
    parser.add_argument(
        "--log-level", default=settings.log_level, help=f"Logging level (default: {settings.log_level})"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("input", help="Spreadsheet file (.xlsx, .xlsm, .csv, .tsv)")
    selection = common.add_mutually_exclusive_group()
    selection.add_argument("--sheet", help="Sheet name (default: first sheet)")
    selection.add_argument("--sheet-index", type=int, help="0-based sheet index (default: 0)")
    selection.add_argument(
        "--all-sheets",
        action="store_true",
        help="Extract every sheet into its own file under --output-dir",
    )
    common.add_argument(
        "--output-dir",
        default=".",
        help="Directory for per-sheet files with --all-sheets (default: current directory)",
    )
    common.add_argument("--output", "-o", help="Output file (default: stdout)")
    common.add_argument(
        "--separator",
        default=settings.csv_separator,
        help="Output separator: a character or comma/semicolon/tab/pipe",
    )
    common.add_argument(
        "--keep-line-breaks",
        action="store_true",
        help="Do not replace line breaks inside cells with spaces",
    )

    detect_parser = subparsers.add_parser(
        "detect", parents=[common], help="Extract the table found by structural detection"
    )
    detect_parser.add_argument("--start", type=int, help="Force the first table row (0-based)")
    detect_parser.add_argument("--end", type=int, help="Force the last table row (0-based)")

    headers_parser = subparsers.add_parser(
        "headers", parents=[common], help="Extract the table under a known header row"
    )
    headers_parser.add_argument(
        "--alias",
        "-a",
        type=parse_alias,
        action="append",
        required=True,
        metavar="ALIAS=FIELD",
        help="Header text fragment and the field it identifies (repeatable)",
    )
    headers_parser.add_argument(
        "--require",
        "-r",
        action="append",
        default=[],
        metavar="FIELD",
        help="Field that must be present in every row (repeatable)",
    )

    sheets_parser = subparsers.add_parser("sheets", help="List the sheets of a workbook")
    sheets_parser.add_argument("input", help="Spreadsheet file")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.log_level)

    try:
        if args.command == "sheets":
            for name in list_sheets(args.input):
                print(name)
            return 0
        return run_extract(args, sys.stdout)
    except (ExtractionError, OSError, KeyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def run_extract(args: argparse.Namespace, stdout: TextIO) -> int:
    """Run the detect or headers command."""
    options = OutputOptions.from_settings()
    options = options.model_copy(
        update={
            "separator": parse_separator(args.separator),
            "clean_line_breaks": options.clean_line_breaks and not args.keep_line_breaks,
        }
    )

    if args.command == "headers":
        mode = HeaderDriven(alias_map=dict(args.alias), required_fields=frozenset(args.require))
    else:
        if (args.start is None) != (args.end is None):
            logger.warning("Both --start and --end are needed to force bounds, ignoring")
        mode = StructuralOnly(forced_bounds=ForcedBounds.from_optional(args.start, args.end))

    if args.all_sheets:
        written = export_all_sheets(args.input, args.output_dir, mode, options)
        for path in written:
            print(path, file=stdout)
        return 0

    grid = open_grid(args.input, sheet=args.sheet, sheet_index=args.sheet_index)
    result = RegionExtractor(options).extract(grid, mode)

    if args.output:
        with open(args.output, "w", newline="", encoding="utf-8") as handle:
            count = write_rows(result.rows, handle, options.separator)
        logger.info(f"Wrote {count} rows to {args.output}")
    else:
        write_rows(result.rows, stdout, options.separator)

    return 0


if __name__ == "__main__":
    sys.exit(main())
