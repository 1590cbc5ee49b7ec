"""CSV ingestion and deterministic CSV/JSON report output."""

import csv
import hashlib
import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import pandas as pd

from .models import ComparisonReport, Table
from .tokenizer import parse_csv

MISMATCH_FIELDS = ("key", "column", "table_a", "table_b")


def read_source(path: str) -> str:
    """Read a CSV source file as UTF-8 text.

    Raises:
        ValueError: If the file does not have a .csv extension
        FileNotFoundError: If the file doesn't exist
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    path_obj = Path(path)
    if path_obj.suffix.lower() != ".csv":
        raise ValueError(f"Please select a CSV file: {path}")

    # newline="" keeps CRLF intact for the tokenizer to normalize
    with open(path_obj, "r", encoding="utf-8", newline="") as f:
        return f.read()


def load_table(path: str) -> Table:
    """Read and parse a CSV source file."""
    return parse_csv(read_source(path))


def write_deterministic_csv(
    rows: Sequence[Mapping[str, Any]],
    path: str,
    columns: Sequence[str],
    sort_column: str | None = None,
    header: Sequence[str] | None = None,
) -> str:
    """
    Write rows to CSV with deterministic formatting.

    Args:
        rows: Rows to write (mappings from column name to value)
        path: Output file path
        columns: Column order; keys outside this list are dropped
        sort_column: Column to sort by (lexicographic, case-sensitive, stable)
        header: Labels written in the header line instead of the column names

    Returns:
        SHA256 hash of the written file

    Determinism invariants:
        - UTF-8 encoding (no BOM)
        - LF newlines (\\n) on all platforms
        - csv.QUOTE_MINIMAL (only quote when necessary)
        - Empty string for missing values
    """
    columns = list(dict.fromkeys(columns))
    df = pd.DataFrame([{col: row.get(col, "") for col in columns} for row in rows], columns=columns)
    df = df.fillna("").astype(str)

    if sort_column and sort_column in df.columns:
        df = df.sort_values(by=sort_column, kind="stable")

    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(
        path_obj,
        index=False,
        header=list(header) if header is not None else True,
        encoding="utf-8",
        lineterminator="\n",
        quoting=csv.QUOTE_MINIMAL,
        na_rep="",
    )

    with open(path_obj, "rb") as f:
        return hashlib.sha256(f.read()).hexdigest()


def mismatch_header(report: ComparisonReport) -> list[str]:
    """Header line for mismatches.csv, labelling the key with the key column name.

    Falls back to "key" when the key column is unset or shares a name with
    one of the other mismatch fields.
    """
    key_label = report.key_column
    if not key_label or key_label in MISMATCH_FIELDS[1:]:
        key_label = "key"
    return [key_label, *MISMATCH_FIELDS[1:]]


def mismatch_rows(report: ComparisonReport) -> list[dict[str, str]]:
    """Flatten per-column mismatches into rows keyed by MISMATCH_FIELDS."""
    rows = []
    for column, entries in report.diffs_by_column.items():
        for entry in entries:
            rows.append(
                {
                    "key": entry.key,
                    "column": column,
                    "table_a": entry.value_a,
                    "table_b": entry.value_b,
                }
            )
    return rows


def export_csvs(
    report: ComparisonReport,
    table_a: Table,
    table_b: Table,
    output_dir: str,
) -> dict[str, str]:
    """Write missing rows and mismatches as CSV files.

    Args:
        report: Comparison report to export
        table_a: Table A (for its column order)
        table_b: Table B (for its column order)
        output_dir: Directory receiving only_in_a.csv, only_in_b.csv, mismatches.csv

    Returns:
        Mapping of written file name -> SHA256 hash
    """
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    key = report.key_column or None

    return {
        "only_in_a.csv": write_deterministic_csv(
            report.missing_rows.only_in_a, str(out_dir / "only_in_a.csv"), table_a.headers, key
        ),
        "only_in_b.csv": write_deterministic_csv(
            report.missing_rows.only_in_b, str(out_dir / "only_in_b.csv"), table_b.headers, key
        ),
        "mismatches.csv": write_deterministic_csv(
            mismatch_rows(report),
            str(out_dir / "mismatches.csv"),
            MISMATCH_FIELDS,
            header=mismatch_header(report),
        ),
    }


def write_report_json(data: dict[str, Any], path: str) -> None:
    """Write a report dictionary as UTF-8 JSON with a trailing newline."""
    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    with open(path_obj, "w", encoding="utf-8", newline="\n") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")
