"""Command-line interface for csv-table-compare."""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich_argparse import RichHelpFormatter

from csv_table_compare.config import (
    DEFAULT_MAX_DIFFS_PER_COLUMN,
    CompareConfig,
    DuplicateKeyPolicy,
)
from csv_table_compare.presenter import DEFAULT_LIMIT_ROWS

try:
    from importlib.metadata import version

    __version__ = version("csv-table-compare")
except Exception:
    __version__ = "unknown"

console = Console()


def _add_engine_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--max-diffs",
        type=int,
        default=DEFAULT_MAX_DIFFS_PER_COLUMN,
        help=(
            "Maximum differences kept per column, further ones are only counted "
            f"(default: {DEFAULT_MAX_DIFFS_PER_COLUMN})"
        ),
    )
    parser.add_argument(
        "--duplicates",
        choices=[p.value for p in DuplicateKeyPolicy],
        default=DuplicateKeyPolicy.LAST.value,
        help="Row kept when a key value repeats within a table (default: last)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="csv-table-compare",
        description="Compare two CSV files: column structure, missing rows and cell values",
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # compare command
    compare_parser = subparsers.add_parser(
        "compare",
        help="Compare two CSV files on a key column",
        description="Compare two CSV files and print a summary of their differences.",
        epilog="""
Examples:
  # Compare columns only (no key column yet)
  csv-table-compare compare reference.csv candidate.csv

  # Match rows on the id column
  csv-table-compare compare reference.csv candidate.csv --key id

  # Save the full report as JSON
  csv-table-compare compare reference.csv candidate.csv --key id --output report.json

Exit codes:
  - 0: No differences found
  - 1: Differences found or errors occurred
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    compare_parser.add_argument("file_a", help="Path to table A (reference)")
    compare_parser.add_argument("file_b", help="Path to table B (compared)")
    compare_parser.add_argument("--key", default="", help="Key column used to match rows")
    compare_parser.add_argument("--output", help="Output file for the JSON report")
    compare_parser.add_argument(
        "--limit-rows",
        type=int,
        default=DEFAULT_LIMIT_ROWS,
        help=f"Maximum rows shown per result table (default: {DEFAULT_LIMIT_ROWS})",
    )
    compare_parser.add_argument(
        "--sort", dest="sort_column", help="Column to sort missing rows by (default: key)"
    )
    compare_parser.add_argument("--desc", action="store_true", help="Sort descending")
    _add_engine_options(compare_parser)

    # keys command
    keys_parser = subparsers.add_parser(
        "keys",
        help="List columns usable as key column",
        description="Print both header lists and the columns present in both tables.",
    )
    keys_parser.add_argument("file_a", help="Path to table A (reference)")
    keys_parser.add_argument("file_b", help="Path to table B (compared)")

    # export command
    export_parser = subparsers.add_parser(
        "export",
        help="Write comparison results to CSV files and an Excel workbook",
        description="Export missing rows and mismatches as deterministic CSV files.",
        epilog="""
Examples:
  # Write only_in_a.csv, only_in_b.csv and mismatches.csv
  csv-table-compare export reference.csv candidate.csv --key id --output-dir out

  # Also write an Excel report
  csv-table-compare export reference.csv candidate.csv --key id --output-dir out --xlsx out/report.xlsx
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    export_parser.add_argument("file_a", help="Path to table A (reference)")
    export_parser.add_argument("file_b", help="Path to table B (compared)")
    export_parser.add_argument("--key", required=True, help="Key column used to match rows")
    export_parser.add_argument("--output-dir", required=True, help="Directory for CSV files")
    export_parser.add_argument("--xlsx", help="Output path for the Excel workbook report")
    _add_engine_options(export_parser)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Configure logging
    logging.basicConfig(
        level=logging.INFO if getattr(args, "verbose", False) else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )

    config = None
    if args.command in ("compare", "export"):
        try:
            config = CompareConfig(
                max_diffs_per_column=args.max_diffs, duplicate_keys=args.duplicates
            )
        except ValueError as e:
            console.print(f"[red]Error:[/red] {e}")
            return 1

    # Import command handlers
    if args.command == "compare":
        from csv_table_compare.commands.compare import compare_files

        return compare_files(
            args.file_a,
            args.file_b,
            key_column=args.key,
            output=args.output,
            config=config,
            limit_rows=args.limit_rows,
            sort_column=args.sort_column,
            descending=args.desc,
            verbose=args.verbose,
        )
    elif args.command == "keys":
        from csv_table_compare.commands.keys import list_keys

        return list_keys(args.file_a, args.file_b)
    elif args.command == "export":
        from csv_table_compare.commands.export import export_comparison

        return export_comparison(
            args.file_a,
            args.file_b,
            key_column=args.key,
            output_dir=args.output_dir,
            xlsx=args.xlsx,
            config=config,
            verbose=args.verbose,
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
