"""Tests for result row ordering."""

import pytest

from csv_table_compare.models import CellDiffEntry
from csv_table_compare.sorting import SortDirection, SortState, preview, sort_rows, toggle_sort


def test_sort_ascending():
    rows = [{"region": "Z"}, {"region": "A"}, {"region": "M"}, {"region": "B"}]

    result = sort_rows(rows, "region", "asc")

    assert [r["region"] for r in result] == ["A", "B", "M", "Z"]


def test_sort_descending():
    rows = [{"region": "Z"}, {"region": "A"}, {"region": "M"}]

    result = sort_rows(rows, "region", SortDirection.DESC)

    assert [r["region"] for r in result] == ["Z", "M", "A"]


def test_sort_case_sensitive():
    """Uppercase sorts before lowercase (code point order)."""
    rows = [{"code": c} for c in ["a", "B", "C", "b", "A"]]

    result = sort_rows(rows, "code", "asc")

    assert [r["code"] for r in result] == ["A", "B", "C", "a", "b"]


def test_sort_not_numeric_aware():
    """Numbers stored as strings sort lexicographically."""
    rows = [{"id": v} for v in ["10", "9", "100", "2"]]

    result = sort_rows(rows, "id", "asc")

    assert [r["id"] for r in result] == ["10", "100", "2", "9"]


def test_missing_values_sort_as_empty():
    rows = [{"k": "b"}, {}, {"k": "a"}, {"k": None}]

    result = sort_rows(rows, "k", "asc")

    assert result[:2] == [{}, {"k": None}]
    assert [r["k"] for r in result[2:]] == ["a", "b"]


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_sort_stable_ties_keep_input_order(direction):
    rows = [
        {"k": "b", "n": 1},
        {"k": "a", "n": 2},
        {"k": "b", "n": 3},
        {"k": "a", "n": 4},
        {"k": "b", "n": 5},
    ]

    result = sort_rows(rows, "k", direction)

    for key in ("a", "b"):
        assert [r["n"] for r in result if r["k"] == key] == [
            r["n"] for r in rows if r["k"] == key
        ]


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_sort_idempotent(direction):
    rows = [{"k": v, "n": i} for i, v in enumerate(["c", "a", "b", "a", "c"])]

    once = sort_rows(rows, "k", direction)
    twice = sort_rows(once, "k", direction)

    assert twice == once


def test_sort_does_not_modify_input():
    rows = [{"k": "z"}, {"k": "a"}]
    original = list(rows)

    result = sort_rows(rows, "k", "asc")

    assert rows == original
    assert result is not rows


def test_sort_empty_column_keeps_order():
    rows = [{"k": "z"}, {"k": "a"}]

    assert sort_rows(rows, "", "asc") == rows


def test_sort_empty_rows():
    assert sort_rows([], "k", "desc") == []


def test_sort_cell_diff_entries_by_attribute():
    entries = [
        CellDiffEntry("2", "b", "x"),
        CellDiffEntry("1", "c", "y"),
        CellDiffEntry("3", "a", "z"),
    ]

    assert [e.key for e in sort_rows(entries, "key", "asc")] == ["1", "2", "3"]
    assert [e.key for e in sort_rows(entries, "value_a", "desc")] == ["1", "2", "3"]


def test_invalid_direction():
    with pytest.raises(ValueError):
        sort_rows([{"k": "a"}], "k", "up")


def test_toggle_sort():
    state = toggle_sort(None, "id")
    assert state == SortState("id", SortDirection.ASC)

    state = toggle_sort(state, "id")
    assert state == SortState("id", SortDirection.DESC)

    state = toggle_sort(state, "id")
    assert state.direction is SortDirection.ASC

    state = toggle_sort(SortState("id", SortDirection.DESC), "name")
    assert state == SortState("name", SortDirection.ASC)


def test_preview():
    rows = list(range(250))

    shown, remaining = preview(rows, 100)

    assert shown == list(range(100))
    assert remaining == 150


def test_preview_fewer_rows_than_limit():
    assert preview([1, 2], 100) == ([1, 2], 0)


def test_preview_negative_limit():
    with pytest.raises(ValueError):
        preview([1], -1)
