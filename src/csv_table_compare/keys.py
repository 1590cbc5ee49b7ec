"""Key indexing and row set comparison."""

import logging
from collections import Counter

from .config import DuplicateKeyPolicy
from .models import MissingRows, Row, Table

logger = logging.getLogger(__name__)


def key_value(row: Row, key_column: str) -> str:
    """Return the row's key, treating an absent key column as empty string."""
    return row.get(key_column, "")


def index_by_key(
    table: Table,
    key_column: str,
    policy: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST,
) -> dict[str, Row]:
    """Build a key value -> row lookup for a table.

    Args:
        table: Table to index
        key_column: Column holding the key ("" means not configured)
        policy: Row kept when a key value repeats (default: last wins)

    Returns:
        Mapping from key value to a single row. Empty if key_column is empty.
    """
    if not key_column:
        return {}

    policy = DuplicateKeyPolicy(policy)
    index: dict[str, Row] = {}
    for row in table.rows:
        key = key_value(row, key_column)
        if policy is DuplicateKeyPolicy.FIRST and key in index:
            continue
        index[key] = row
    return index


def find_duplicate_keys(table: Table, key_column: str) -> dict[str, int]:
    """Find key values occurring more than once.

    Returns:
        Mapping from repeated key value to its number of occurrences, in
        first-seen order. Empty if key_column is empty.
    """
    if not key_column:
        return {}

    counts = Counter(key_value(row, key_column) for row in table.rows)
    duplicates = {key: count for key, count in counts.items() if count > 1}

    if duplicates:
        extra = sum(duplicates.values()) - len(duplicates)
        logger.warning(
            f"{len(duplicates)} duplicate value(s) in key column '{key_column}', "
            f"{extra} row(s) shadowed"
        )
    return duplicates


def diff_rows(table_a: Table, table_b: Table, key_column: str) -> MissingRows:
    """Find rows whose key value exists in only one table.

    Args:
        table_a: First table
        table_b: Second table
        key_column: Column used to match rows ("" means not configured)

    Returns:
        MissingRows with rows of A absent from B and rows of B absent from A,
        each in its table's row order. Both empty if key_column is empty.
    """
    if not key_column:
        return MissingRows()

    keys_a = {key_value(row, key_column) for row in table_a.rows}
    keys_b = {key_value(row, key_column) for row in table_b.rows}

    return MissingRows(
        only_in_a=tuple(row for row in table_a.rows if key_value(row, key_column) not in keys_b),
        only_in_b=tuple(row for row in table_b.rows if key_value(row, key_column) not in keys_a),
    )
