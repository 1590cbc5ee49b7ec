"""Compare command implementation - compares two CSV files on a key column."""

import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.console import Console

from csv_table_compare.config import CompareConfig
from csv_table_compare.csvio import load_table, write_report_json
from csv_table_compare.engine import compare_tables
from csv_table_compare.models import ComparisonReport
from csv_table_compare.presenter import DEFAULT_LIMIT_ROWS, render_report
from csv_table_compare.sorting import SortDirection

console = Console()


def build_report_document(file_a: str, file_b: str, report: ComparisonReport) -> dict[str, Any]:
    """Wrap a report with the compared file paths and a UTC timestamp."""
    return {
        "file_a": str(Path(file_a).resolve()),
        "file_b": str(Path(file_b).resolve()),
        "compared_at": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        **report.to_dict(),
    }


def compare_files(
    file_a: str,
    file_b: str,
    key_column: str = "",
    output: str | None = None,
    config: CompareConfig | None = None,
    limit_rows: int = DEFAULT_LIMIT_ROWS,
    sort_column: str | None = None,
    descending: bool = False,
    verbose: bool = False,
) -> int:
    """Compare two CSV files and print the report.

    Args:
        file_a: Path to table A (reference)
        file_b: Path to table B (compared)
        key_column: Column used to match rows ("" compares columns only)
        output: Optional path for the JSON report
        config: Comparison options
        limit_rows: Maximum rows shown per result table
        sort_column: Column used to order missing rows (default: key column)
        descending: Sort result tables descending
        verbose: Print tracebacks on error

    Returns:
        0 if no differences found, 1 if differences found or errors occurred
    """
    direction = SortDirection.DESC if descending else SortDirection.ASC
    try:
        table_a = load_table(file_a)
        table_b = load_table(file_b)
        report = compare_tables(table_a, table_b, key_column, config)
        render_report(
            console,
            report,
            table_a.headers,
            table_b.headers,
            sort_column=sort_column,
            direction=direction,
            limit=limit_rows,
        )
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        if verbose:
            traceback.print_exc()
        return 1

    if output:
        try:
            write_report_json(build_report_document(file_a, file_b, report), output)
            console.print(f"[green]✓[/green] Report written to {output}")
        except Exception as e:
            console.print(f"[red]Error:[/red] Failed to write output: {e}")
            return 1

    return 1 if report.has_differences else 0
