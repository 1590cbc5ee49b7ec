"""Data models for csv-table-compare.

This module defines the parsed table structure and the immutable result
types produced by the diff engine.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

Row = dict[str, str]


@dataclass(frozen=True)
class Table:
    """A parsed delimited-text source.

    Attributes:
        headers: Column names in first-seen order (may contain duplicates)
        rows: Data rows in source order, each mapping column name to value
    """

    headers: tuple[str, ...] = ()
    rows: tuple[Row, ...] = ()

    @property
    def row_count(self) -> int:
        """Number of data rows (excluding header)."""
        return len(self.rows)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"headers": list(self.headers), "rows": [dict(row) for row in self.rows]}

    @staticmethod
    def empty() -> "Table":
        """Create a table with no headers and no rows."""
        return Table(headers=(), rows=())


@dataclass(frozen=True)
class ColumnDiff:
    """Structural difference between two header lists.

    Attributes:
        only_a: Headers of table A absent from table B (A's order)
        only_b: Headers of table B absent from table A (B's order)
        common: Headers of table A present in table B (A's order)
        identical: True iff only_a and only_b are both empty
    """

    only_a: tuple[str, ...]
    only_b: tuple[str, ...]
    common: tuple[str, ...]
    identical: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "only_a": list(self.only_a),
            "only_b": list(self.only_b),
            "common": list(self.common),
            "identical": self.identical,
        }


@dataclass(frozen=True)
class MissingRows:
    """Rows whose key value is present in only one table."""

    only_in_a: tuple[Row, ...] = ()
    only_in_b: tuple[Row, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "only_in_a": [dict(row) for row in self.only_in_a],
            "only_in_b": [dict(row) for row in self.only_in_b],
        }


@dataclass(frozen=True)
class CellDiffEntry:
    """One mismatching cell for a key present in both tables."""

    key: str
    value_a: str
    value_b: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"key": self.key, "value_a": self.value_a, "value_b": self.value_b}


def _diffs_to_dict(diffs_by_column: Mapping[str, tuple[CellDiffEntry, ...]]) -> dict[str, Any]:
    return {col: [entry.to_dict() for entry in entries] for col, entries in diffs_by_column.items()}


def _freeze_mappings(obj: Any, *names: str) -> None:
    # Read-only copies so a report cannot be changed through its mapping fields
    for name in names:
        object.__setattr__(obj, name, MappingProxyType(dict(getattr(obj, name))))


@dataclass(frozen=True)
class CellDiffs:
    """Result of comparing cell values for matched keys.

    Attributes:
        matching_count: Rows of table A whose key exists in table B
        total_in_a: Row count of table A
        total_in_b: Row count of table B
        diffs_by_column: Column name -> retained mismatches (A's column order)
        total_mismatches: Sum of retained mismatches over all columns
        suppressed_by_column: Column name -> mismatches dropped by the cap
    """

    matching_count: int = 0
    total_in_a: int = 0
    total_in_b: int = 0
    diffs_by_column: Mapping[str, tuple[CellDiffEntry, ...]] = field(default_factory=dict)
    total_mismatches: int = 0
    suppressed_by_column: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        _freeze_mappings(self, "diffs_by_column", "suppressed_by_column")

    @property
    def total_suppressed(self) -> int:
        """Total number of mismatches dropped by the per-column cap."""
        return sum(self.suppressed_by_column.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "matching_count": self.matching_count,
            "total_in_a": self.total_in_a,
            "total_in_b": self.total_in_b,
            "diffs_by_column": _diffs_to_dict(self.diffs_by_column),
            "total_mismatches": self.total_mismatches,
            "suppressed_by_column": dict(self.suppressed_by_column),
            "total_suppressed": self.total_suppressed,
        }


@dataclass(frozen=True)
class ComparisonReport:
    """Full result of comparing two tables on a key column.

    A report is never updated in place: any change to the tables, the key
    column or the configuration produces a new report. Mapping fields are
    stored as read-only views over private copies.

    Attributes:
        key_column: Column used to match rows ("" when not configured)
        column_diff: Header set differences
        missing_rows: Rows present in only one table
        matching_count: Rows of table A matched in table B
        total_in_a: Row count of table A (0 when not configured)
        total_in_b: Row count of table B (0 when not configured)
        diffs_by_column: Column name -> retained cell mismatches
        total_mismatches: Sum of retained cell mismatches
        suppressed_by_column: Column name -> mismatches dropped by the cap
        duplicate_keys_a: Key value -> occurrences, for keys repeated in A
        duplicate_keys_b: Key value -> occurrences, for keys repeated in B
        key_candidates: Columns usable as key column
    """

    key_column: str
    column_diff: ColumnDiff
    missing_rows: MissingRows
    matching_count: int = 0
    total_in_a: int = 0
    total_in_b: int = 0
    diffs_by_column: Mapping[str, tuple[CellDiffEntry, ...]] = field(default_factory=dict)
    total_mismatches: int = 0
    suppressed_by_column: Mapping[str, int] = field(default_factory=dict)
    duplicate_keys_a: Mapping[str, int] = field(default_factory=dict)
    duplicate_keys_b: Mapping[str, int] = field(default_factory=dict)
    key_candidates: tuple[str, ...] = ()

    def __post_init__(self):
        _freeze_mappings(
            self,
            "diffs_by_column",
            "suppressed_by_column",
            "duplicate_keys_a",
            "duplicate_keys_b",
        )

    @property
    def configured(self) -> bool:
        """False while no key column has been selected."""
        return bool(self.key_column)

    @property
    def total_suppressed(self) -> int:
        return sum(self.suppressed_by_column.values())

    @property
    def truncated(self) -> bool:
        """True if any column hit the mismatch cap."""
        return self.total_suppressed > 0

    @property
    def has_differences(self) -> bool:
        """True if columns, rows or cell values differ."""
        return (
            not self.column_diff.identical
            or bool(self.missing_rows.only_in_a)
            or bool(self.missing_rows.only_in_b)
            or self.total_mismatches > 0
            or self.truncated
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "key_column": self.key_column,
            "configured": self.configured,
            "key_candidates": list(self.key_candidates),
            "column_diff": self.column_diff.to_dict(),
            "missing_rows": self.missing_rows.to_dict(),
            "diffs_by_column": _diffs_to_dict(self.diffs_by_column),
            "suppressed_by_column": dict(self.suppressed_by_column),
            "duplicate_keys": {
                "a": dict(self.duplicate_keys_a),
                "b": dict(self.duplicate_keys_b),
            },
            "summary": {
                "total_in_a": self.total_in_a,
                "total_in_b": self.total_in_b,
                "matching_count": self.matching_count,
                "only_in_a": len(self.missing_rows.only_in_a),
                "only_in_b": len(self.missing_rows.only_in_b),
                "columns_only_a": len(self.column_diff.only_a),
                "columns_only_b": len(self.column_diff.only_b),
                "total_mismatches": self.total_mismatches,
                "total_suppressed": self.total_suppressed,
                "truncated": self.truncated,
            },
        }
