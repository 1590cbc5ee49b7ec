"""Keys command implementation - lists columns usable as key column."""

from rich.console import Console
from rich.markup import escape

from csv_table_compare.columns import key_candidates
from csv_table_compare.csvio import load_table

console = Console()


def list_keys(file_a: str, file_b: str) -> int:
    """Print both header lists and the columns shared by them.

    Returns:
        0 on success, 1 on error
    """
    try:
        table_a = load_table(file_a)
        table_b = load_table(file_b)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    for name, table in (("A", table_a), ("B", table_b)):
        console.print(
            f"[cyan]Table {name}[/cyan] ({table.row_count} rows): "
            f"{escape(', '.join(table.headers))}"
        )

    candidates = key_candidates(table_a.headers, table_b.headers)
    if not candidates:
        console.print("[yellow]⚠[/yellow] No column is shared by both tables")
        return 0

    console.print("[bold]Key candidates:[/bold]")
    for column in candidates:
        console.print(f"  {escape(column)}")
    return 0
