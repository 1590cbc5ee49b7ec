"""Shared fixtures for comparison tests."""

import pytest

from csv_table_compare.models import Table


@pytest.fixture
def table_a() -> Table:
    """Reference table with ids 1 and 2."""
    return Table(
        headers=("id", "name"),
        rows=({"id": "1", "name": "x"}, {"id": "2", "name": "y"}),
    )


@pytest.fixture
def table_b() -> Table:
    """Table sharing id 1 with the same name, plus id 3."""
    return Table(
        headers=("id", "name"),
        rows=({"id": "1", "name": "x"}, {"id": "3", "name": "z"}),
    )


@pytest.fixture
def table_b_mismatch() -> Table:
    """Like table_b but id 1 has name "X"."""
    return Table(
        headers=("id", "name"),
        rows=({"id": "1", "name": "X"}, {"id": "3", "name": "z"}),
    )


@pytest.fixture
def write_csv(tmp_path):
    """Write text to a CSV file under tmp_path and return its path as str."""

    def _write(name: str, text: str) -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write
