"""Deterministic ordering of result rows for presentation."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

import pandas as pd

T = TypeVar("T")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortState:
    """Current sort column and direction of a result table."""

    column: str
    direction: SortDirection = SortDirection.ASC


def _sort_value(row: Any, column: str) -> str:
    if isinstance(row, Mapping):
        value = row.get(column)
    else:
        value = getattr(row, column, None)
    return "" if value is None else str(value)


def sort_rows(rows: Sequence[T], column: str, direction: SortDirection | str = "asc") -> list[T]:
    """Sort rows by one column's string value.

    Args:
        rows: Mappings, or objects exposing the column as an attribute
            (e.g. CellDiffEntry with "key", "value_a", "value_b")
        column: Column to sort by; empty keeps input order
        direction: "asc" or "desc"

    Returns:
        New sorted list (does not modify the input)

    Raises:
        ValueError: If direction is not "asc" or "desc"

    Sorting semantics:
        - Lexicographic, case-sensitive string comparison (not numeric-aware)
        - Missing values sort as empty string
        - Stable in both directions: ties keep their input order
    """
    direction = SortDirection(direction)
    if not column or not rows:
        return list(rows)

    values = pd.Series([_sort_value(row, column) for row in rows], dtype=object)
    order = values.sort_values(ascending=direction is SortDirection.ASC, kind="stable").index
    return [rows[i] for i in order]


def toggle_sort(state: SortState | None, column: str) -> SortState:
    """Return the sort state after a click on a column header.

    Clicking the current column flips its direction; clicking another column
    sorts by it ascending.
    """
    if state is not None and state.column == column:
        flipped = SortDirection.DESC if state.direction is SortDirection.ASC else SortDirection.ASC
        return SortState(column=column, direction=flipped)
    return SortState(column=column, direction=SortDirection.ASC)


def preview(rows: Sequence[T], limit: int) -> tuple[list[T], int]:
    """Split rows into the displayed window and the count left out.

    Returns:
        Tuple of (first `limit` rows, number of remaining rows)
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    shown = list(rows[:limit])
    return shown, len(rows) - len(shown)
