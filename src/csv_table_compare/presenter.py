"""Terminal rendering of a ComparisonReport."""

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models import ComparisonReport, Row
from .sorting import SortDirection, preview, sort_rows

DEFAULT_LIMIT_ROWS = 100


def render_summary(console: Console, report: ComparisonReport) -> None:
    """Print the summary cards: row counts, key matching, columns, mismatches."""
    column_diff = report.column_diff
    if column_diff.identical:
        columns = "[green]Identical[/green]"
    else:
        columns = (
            f"[yellow]{len(column_diff.only_a)} missing, "
            f"{len(column_diff.only_b)} extra[/yellow]"
        )

    table = Table(title="Summary", show_header=True, header_style="bold cyan")
    table.add_column("Check")
    table.add_column("Result")
    table.add_row("Row counts", f"A: {report.total_in_a} | B: {report.total_in_b}")
    table.add_row(
        "Key matching",
        f"{report.matching_count} matched "
        f"[dim](missing: {len(report.missing_rows.only_in_a)} | "
        f"extra: {len(report.missing_rows.only_in_b)})[/dim]",
    )
    table.add_row("Columns", columns)
    table.add_row("Data mismatches", f"{report.total_mismatches} differences")
    console.print(table)

    if report.truncated:
        console.print(
            f"[yellow]⚠[/yellow] {report.total_suppressed} further differences were "
            "suppressed by the per-column cap"
        )
    for side, duplicates in (("A", report.duplicate_keys_a), ("B", report.duplicate_keys_b)):
        if duplicates:
            console.print(
                f"[yellow]⚠[/yellow] {len(duplicates)} duplicate key value(s) in table {side}"
            )


def render_column_diff(console: Console, report: ComparisonReport) -> None:
    column_diff = report.column_diff
    if column_diff.identical:
        return

    console.print("\n[bold]Column Structure Differences[/bold]")
    if column_diff.only_a:
        console.print(f"  [red]Missing in Table B:[/red] {escape(', '.join(column_diff.only_a))}")
    if column_diff.only_b:
        console.print(
            f"  [yellow]Extra in Table B:[/yellow] {escape(', '.join(column_diff.only_b))}"
        )


def _render_rows(
    console: Console,
    title: str,
    rows: Sequence[Row],
    headers: Sequence[str],
    sort_column: str,
    direction: SortDirection,
    limit: int,
) -> None:
    if not rows:
        return

    headers = list(dict.fromkeys(headers))
    shown, remaining = preview(sort_rows(rows, sort_column, direction), limit)

    console.print(f"[bold]{title}[/bold] ({len(rows):,} rows, {len(headers)} columns)")
    table = Table(show_header=True, header_style="bold cyan")
    for header in headers:
        table.add_column(escape(header))
    for row in shown:
        table.add_row(*[escape(row.get(h, "")) or "[dim](empty)[/dim]" for h in headers])
    console.print(table)

    if remaining:
        console.print(f"[dim]+{remaining} more rows...[/dim]")


def render_missing_rows(
    console: Console,
    report: ComparisonReport,
    headers_a: Sequence[str],
    headers_b: Sequence[str],
    sort_column: str | None = None,
    direction: SortDirection = SortDirection.ASC,
    limit: int = DEFAULT_LIMIT_ROWS,
) -> None:
    """Print rows missing from B and rows extra in B, sorted and windowed."""
    if not report.configured:
        return

    console.print("\n[bold]Missing Rows[/bold]")
    sort_column = sort_column or report.key_column
    missing = report.missing_rows
    _render_rows(
        console, "Missing from Table B", missing.only_in_a, headers_a, sort_column, direction, limit
    )
    _render_rows(
        console, "Extra in Table B", missing.only_in_b, headers_b, sort_column, direction, limit
    )

    if not missing.only_in_a and not missing.only_in_b:
        console.print("[green]✓[/green] All primary keys present in both tables")


def render_cell_diffs(
    console: Console,
    report: ComparisonReport,
    direction: SortDirection = SortDirection.ASC,
    limit: int = DEFAULT_LIMIT_ROWS,
) -> None:
    """Print one table per column with mismatching values, sorted by key."""
    console.print("\n[bold]Data Mismatches by Column[/bold]")
    if not report.configured:
        console.print("[dim]Select a key column to compare data[/dim]")
        return

    for column, entries in report.diffs_by_column.items():
        if not entries:
            continue
        shown, remaining = preview(sort_rows(entries, "key", direction), limit)

        console.print(f"[bold]{escape(column)}[/bold] ({len(entries)} differences)")
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column(escape(report.key_column))
        table.add_column("Table A", style="red")
        table.add_column("Table B", style="green")
        for entry in shown:
            table.add_row(escape(entry.key), escape(entry.value_a), escape(entry.value_b))
        console.print(table)

        if remaining:
            console.print(f"[dim]+{remaining} more differences...[/dim]")

    if report.total_mismatches == 0:
        console.print("[green]✓[/green] All data values match for matching primary keys")


def render_report(
    console: Console,
    report: ComparisonReport,
    headers_a: Sequence[str],
    headers_b: Sequence[str],
    sort_column: str | None = None,
    direction: SortDirection = SortDirection.ASC,
    limit: int = DEFAULT_LIMIT_ROWS,
) -> None:
    """Print every section of the report."""
    render_summary(console, report)
    render_column_diff(console, report)
    render_missing_rows(console, report, headers_a, headers_b, sort_column, direction, limit)
    render_cell_diffs(console, report, direction, limit)
