"""Column set comparison between two header lists."""

from collections.abc import Sequence

from .models import ColumnDiff


def diff_columns(headers_a: Sequence[str], headers_b: Sequence[str]) -> ColumnDiff:
    """Compare two header lists by exact name.

    Args:
        headers_a: Headers of table A
        headers_b: Headers of table B

    Returns:
        ColumnDiff with only_a/common in A's order and only_b in B's order.
        Duplicate names are kept positionally.
    """
    set_a = set(headers_a)
    set_b = set(headers_b)

    only_a = tuple(h for h in headers_a if h not in set_b)
    only_b = tuple(h for h in headers_b if h not in set_a)
    common = tuple(h for h in headers_a if h in set_b)

    return ColumnDiff(
        only_a=only_a,
        only_b=only_b,
        common=common,
        identical=not only_a and not only_b,
    )


def key_candidates(headers_a: Sequence[str], headers_b: Sequence[str]) -> list[str]:
    """List the columns that can be used to match rows.

    Returns an empty list until both tables have headers. Otherwise returns the
    columns of A that also exist in B, without duplicates, in A's order.
    """
    if not headers_a or not headers_b:
        return []

    set_b = set(headers_b)
    candidates: list[str] = []
    seen: set[str] = set()
    for header in headers_a:
        if header in set_b and header not in seen:
            seen.add(header)
            candidates.append(header)
    return candidates
