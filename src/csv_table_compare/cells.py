"""Cell value comparison for rows matched on a key column."""

import logging

from .config import DEFAULT_MAX_DIFFS_PER_COLUMN, DuplicateKeyPolicy, validate_max_diffs
from .keys import index_by_key, key_value
from .models import CellDiffEntry, CellDiffs, Table

logger = logging.getLogger(__name__)


def diff_cells(
    table_a: Table,
    table_b: Table,
    key_column: str,
    max_diffs_per_column: int = DEFAULT_MAX_DIFFS_PER_COLUMN,
    policy: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST,
) -> CellDiffs:
    """Compare non-key cell values of rows whose key exists in both tables.

    Args:
        table_a: Reference table; its header list decides which columns are compared
        table_b: Table compared against A, indexed by key
        key_column: Column used to match rows ("" means not configured)
        max_diffs_per_column: Mismatches retained per column before the rest
            are only counted as suppressed
        policy: Row of B kept when a key repeats in B

    Returns:
        CellDiffs; zeroed when key_column is empty

    Raises:
        ValueError: If max_diffs_per_column is not an integer >= 0

    Rows of A without a match in B are skipped, they are reported by
    diff_rows. Columns present only in B are never compared.
    """
    validate_max_diffs(max_diffs_per_column)
    if not key_column:
        return CellDiffs()

    index_b = index_by_key(table_b, key_column, policy)

    # Duplicate header names share one column
    columns = [col for col in dict.fromkeys(table_a.headers) if col != key_column]
    diffs: dict[str, list[CellDiffEntry]] = {col: [] for col in columns}
    suppressed: dict[str, int] = {}
    matching_count = 0

    for row_a in table_a.rows:
        key = key_value(row_a, key_column)
        row_b = index_b.get(key)
        if row_b is None:
            continue
        matching_count += 1

        for col in columns:
            value_a = row_a.get(col, "").strip()
            value_b = row_b.get(col, "").strip()
            if value_a == value_b:
                continue
            if len(diffs[col]) < max_diffs_per_column:
                diffs[col].append(CellDiffEntry(key=key, value_a=value_a, value_b=value_b))
            else:
                suppressed[col] = suppressed.get(col, 0) + 1

    if suppressed:
        logger.warning(
            f"Mismatch cap of {max_diffs_per_column} per column reached, "
            f"{sum(suppressed.values())} difference(s) suppressed in: {list(suppressed)}"
        )

    diffs_by_column = {col: tuple(entries) for col, entries in diffs.items()}
    return CellDiffs(
        matching_count=matching_count,
        total_in_a=table_a.row_count,
        total_in_b=table_b.row_count,
        diffs_by_column=diffs_by_column,
        total_mismatches=sum(len(entries) for entries in diffs_by_column.values()),
        suppressed_by_column=suppressed,
    )
