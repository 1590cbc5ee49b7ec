"""Export command implementation - writes comparison results to files."""

import logging
import traceback
from pathlib import Path

from rich.console import Console

from csv_table_compare.config import CompareConfig
from csv_table_compare.csvio import export_csvs, load_table
from csv_table_compare.engine import compare_tables
from csv_table_compare.excel import write_report_workbook

logger = logging.getLogger(__name__)
console = Console()


def export_comparison(
    file_a: str,
    file_b: str,
    key_column: str,
    output_dir: str,
    xlsx: str | None = None,
    config: CompareConfig | None = None,
    verbose: bool = False,
) -> int:
    """Compare two CSV files and write the results as CSV files and a workbook.

    Args:
        file_a: Path to table A (reference)
        file_b: Path to table B (compared)
        key_column: Column used to match rows
        output_dir: Directory for only_in_a.csv, only_in_b.csv and mismatches.csv
        xlsx: Optional path for the .xlsx report
        config: Comparison options
        verbose: Print tracebacks on error

    Returns:
        0 on success, 1 on error
    """
    try:
        table_a = load_table(file_a)
        table_b = load_table(file_b)
        report = compare_tables(table_a, table_b, key_column, config)

        hashes = export_csvs(report, table_a, table_b, output_dir)
        for name, digest in hashes.items():
            logger.info(f"Wrote {name} ({digest[:12]})")
        console.print(f"[green]✓[/green] Wrote {len(hashes)} CSV files to {Path(output_dir)}")

        if xlsx:
            path = write_report_workbook(report, table_a, table_b, xlsx)
            console.print(f"[green]✓[/green] Workbook written to {path}")
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        if verbose:
            traceback.print_exc()
        return 1

    return 0
