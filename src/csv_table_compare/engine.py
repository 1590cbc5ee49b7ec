"""Comparison engine - assembles a ComparisonReport from two tables."""

import logging

from .cells import diff_cells
from .columns import diff_columns, key_candidates
from .config import CompareConfig
from .keys import diff_rows, find_duplicate_keys
from .models import ComparisonReport, Table
from .tokenizer import parse_csv

logger = logging.getLogger(__name__)


class KeyColumnError(ValueError):
    """Raised when the selected key column is missing from a table."""


def _check_key_column(table_a: Table, table_b: Table, key_column: str) -> None:
    missing = [
        name
        for name, table in (("A", table_a), ("B", table_b))
        if key_column not in table.headers
    ]
    if missing:
        raise KeyColumnError(
            f"Key column '{key_column}' not found in table {' and '.join(missing)}"
        )


def compare_tables(
    table_a: Table,
    table_b: Table,
    key_column: str = "",
    config: CompareConfig | None = None,
) -> ComparisonReport:
    """Compare two tables and build a new immutable report.

    Args:
        table_a: Reference table
        table_b: Table compared against A
        key_column: Column used to match rows ("" means not configured yet)
        config: Comparison options (default: CompareConfig())

    Returns:
        ComparisonReport. Without a key column only the column diff and key
        candidates are filled in, all row and cell results are zeroed.

    Raises:
        KeyColumnError: If key_column is set but absent from either table
    """
    config = config or CompareConfig()

    column_diff = diff_columns(table_a.headers, table_b.headers)
    candidates = tuple(key_candidates(table_a.headers, table_b.headers))

    if not key_column:
        logger.info("No key column selected, skipping row and cell comparison")
        return ComparisonReport(
            key_column="",
            column_diff=column_diff,
            missing_rows=diff_rows(table_a, table_b, ""),
            key_candidates=candidates,
        )

    _check_key_column(table_a, table_b, key_column)

    missing_rows = diff_rows(table_a, table_b, key_column)
    cells = diff_cells(
        table_a,
        table_b,
        key_column,
        max_diffs_per_column=config.max_diffs_per_column,
        policy=config.duplicate_keys,
    )

    logger.info(
        f"Compared {cells.total_in_a} x {cells.total_in_b} rows on '{key_column}': "
        f"{cells.matching_count} matched, {len(missing_rows.only_in_a)} only in A, "
        f"{len(missing_rows.only_in_b)} only in B, {cells.total_mismatches} mismatches"
    )

    return ComparisonReport(
        key_column=key_column,
        column_diff=column_diff,
        missing_rows=missing_rows,
        matching_count=cells.matching_count,
        total_in_a=cells.total_in_a,
        total_in_b=cells.total_in_b,
        diffs_by_column=cells.diffs_by_column,
        total_mismatches=cells.total_mismatches,
        suppressed_by_column=cells.suppressed_by_column,
        duplicate_keys_a=find_duplicate_keys(table_a, key_column),
        duplicate_keys_b=find_duplicate_keys(table_b, key_column),
        key_candidates=candidates,
    )


def compare_texts(
    text_a: str,
    text_b: str,
    key_column: str = "",
    config: CompareConfig | None = None,
) -> ComparisonReport:
    """Parse two CSV texts and compare them."""
    return compare_tables(parse_csv(text_a), parse_csv(text_b), key_column, config)


class TableComparator:
    """Recompute a report only when its inputs change.

    Tables are compared by identity: loading a new file means parsing a new
    Table, which invalidates the cached report. A previously returned report
    is never modified.
    """

    def __init__(self, config: CompareConfig | None = None):
        self.config = config or CompareConfig()
        self._inputs: tuple[Table, Table, str, CompareConfig] | None = None
        self._report: ComparisonReport | None = None

    def report(self, table_a: Table, table_b: Table, key_column: str = "") -> ComparisonReport:
        """Return the report for these inputs, reusing the last one if unchanged."""
        if self._inputs is not None and self._report is not None:
            last_a, last_b, last_key, last_config = self._inputs
            if (
                last_a is table_a
                and last_b is table_b
                and last_key == key_column
                and last_config == self.config
            ):
                return self._report

        report = compare_tables(table_a, table_b, key_column, self.config)
        self._inputs = (table_a, table_b, key_column, self.config)
        self._report = report
        return report
