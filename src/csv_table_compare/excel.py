"""Excel workbook report for a comparison.

Minimal wrapper over openpyxl writing one sheet per report section.
"""

import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .models import ComparisonReport, Table

MAX_SHEET_TITLE = 31
_INVALID_TITLE_CHARS = re.compile(r"[\\/*?:\[\]]")


def sheet_title(name: str, used: set[str]) -> str:
    """Make a valid, unique Excel sheet title.

    Args:
        name: Desired title
        used: Titles already taken in the workbook (updated in place)

    Returns:
        Title without characters Excel rejects, at most 31 characters,
        suffixed with " (n)" if needed to stay unique
    """
    base = _INVALID_TITLE_CHARS.sub("_", ILLEGAL_CHARACTERS_RE.sub("", name)).strip() or "Sheet"
    title = base[:MAX_SHEET_TITLE]
    counter = 2
    while title.lower() in {t.lower() for t in used}:
        suffix = f" ({counter})"
        title = base[: MAX_SHEET_TITLE - len(suffix)] + suffix
        counter += 1
    used.add(title)
    return title


def _append(ws: Worksheet, values: Sequence[Any]) -> None:
    """Append one row, storing every string as literal text.

    Characters that XML cannot carry are dropped, and strings are never
    turned into formulas even when they start with "=".
    """
    ws.append([ILLEGAL_CHARACTERS_RE.sub("", v) if isinstance(v, str) else v for v in values])
    for cell in ws[ws.max_row]:
        if isinstance(cell.value, str):
            cell.data_type = "s"


def _write_rows(
    ws: Worksheet,
    rows: Sequence[Mapping[str, Any]],
    fields: Sequence[str],
    headers: Sequence[str] | None = None,
) -> None:
    headers = list(headers or fields)
    _append(ws, headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in rows:
        _append(ws, [row.get(f, "") for f in fields])

    for idx, header in enumerate(headers, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = max(12, len(str(header)) + 4)


def _summary_rows(report: ComparisonReport) -> list[dict[str, Any]]:
    column_diff = report.column_diff
    columns = (
        "Identical"
        if column_diff.identical
        else f"{len(column_diff.only_a)} missing, {len(column_diff.only_b)} extra"
    )
    return [
        {"metric": "Key column", "value": report.key_column or "(not selected)"},
        {"metric": "Rows in A", "value": report.total_in_a},
        {"metric": "Rows in B", "value": report.total_in_b},
        {"metric": "Matched", "value": report.matching_count},
        {"metric": "Missing from B", "value": len(report.missing_rows.only_in_a)},
        {"metric": "Extra in B", "value": len(report.missing_rows.only_in_b)},
        {"metric": "Columns", "value": columns},
        {"metric": "Data mismatches", "value": report.total_mismatches},
        {"metric": "Suppressed mismatches", "value": report.total_suppressed},
    ]


def write_report_workbook(
    report: ComparisonReport, table_a: Table, table_b: Table, path: str
) -> str:
    """Write the comparison report as an .xlsx workbook.

    Args:
        report: Comparison report
        table_a: Table A (column order for "Missing from B")
        table_b: Table B (column order for "Extra in B")
        path: Output .xlsx path

    Returns:
        Path of the written workbook
    """
    used: set[str] = set()
    wb = Workbook()

    ws_summary = wb.active
    ws_summary.title = sheet_title("Summary", used)
    _write_rows(ws_summary, _summary_rows(report), ["metric", "value"])

    ws_columns = wb.create_sheet(sheet_title("Column differences", used))
    column_rows = [{"column": c, "side": "missing in B"} for c in report.column_diff.only_a]
    column_rows += [{"column": c, "side": "extra in B"} for c in report.column_diff.only_b]
    _write_rows(ws_columns, column_rows, ["column", "side"])

    ws_missing = wb.create_sheet(sheet_title("Missing from B", used))
    _write_rows(ws_missing, report.missing_rows.only_in_a, list(dict.fromkeys(table_a.headers)))

    ws_extra = wb.create_sheet(sheet_title("Extra in B", used))
    _write_rows(ws_extra, report.missing_rows.only_in_b, list(dict.fromkeys(table_b.headers)))

    diff_headers = ["Table A", "Table B"]
    key_label = report.key_column if report.key_column not in ("", *diff_headers) else "key"
    for column, entries in report.diffs_by_column.items():
        if not entries:
            continue
        ws = wb.create_sheet(sheet_title(f"Diff - {column}", used))
        _write_rows(
            ws,
            [e.to_dict() for e in entries],
            ["key", "value_a", "value_b"],
            [key_label, *diff_headers],
        )

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(out_path)
    return str(out_path)
