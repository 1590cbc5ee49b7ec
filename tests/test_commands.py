"""Tests for compare, keys and export commands and the CLI entry point."""

import json

import openpyxl
import pytest

from csv_table_compare.cli import main
from csv_table_compare.commands.compare import build_report_document, compare_files
from csv_table_compare.commands.export import export_comparison
from csv_table_compare.commands.keys import list_keys
from csv_table_compare.config import CompareConfig
from csv_table_compare.engine import compare_texts
from csv_table_compare.presenter import DEFAULT_LIMIT_ROWS

TEXT_A = "id,name\n1,x\n2,y\n"
TEXT_B = "id,name\n1,x\n3,z\n"
TEXT_B_MISMATCH = "id,name\n1,X\n3,z\n"


@pytest.fixture
def files(write_csv):
    """Paths for table A, table B and a copy of A."""
    return {
        "a": write_csv("a.csv", TEXT_A),
        "b": write_csv("b.csv", TEXT_B_MISMATCH),
        "a_copy": write_csv("a_copy.csv", TEXT_A),
    }


def test_compare_identical_files_exit_zero(files):
    assert compare_files(files["a"], files["a_copy"], "id") == 0


def test_compare_differences_exit_one(files):
    assert compare_files(files["a"], files["b"], "id") == 1


def test_compare_without_key_compares_columns_only(files):
    """Same columns and no key: nothing differs yet."""
    assert compare_files(files["a"], files["b"]) == 0


def test_compare_writes_json(files, tmp_path):
    output = tmp_path / "out" / "report.json"

    result = compare_files(files["a"], files["b"], "id", output=str(output))

    assert result == 1
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["key_column"] == "id"
    assert data["summary"]["matching_count"] == 1
    assert data["missing_rows"]["only_in_a"] == [{"id": "2", "name": "y"}]
    assert data["missing_rows"]["only_in_b"] == [{"id": "3", "name": "z"}]
    assert data["diffs_by_column"]["name"] == [{"key": "1", "value_a": "x", "value_b": "X"}]
    assert data["compared_at"].endswith("Z")


def test_compare_missing_file_exit_one(files, tmp_path):
    assert compare_files(files["a"], str(tmp_path / "missing.csv"), "id") == 1


def test_compare_unknown_key_exit_one(files):
    assert compare_files(files["a"], files["b"], "nope") == 1


def test_compare_with_cap(files):
    config = CompareConfig(max_diffs_per_column=0)

    assert compare_files(files["a"], files["b"], "id", config=config) == 1


def test_compare_renders_sections(files, capsys):
    compare_files(files["a"], files["b"], "id", limit_rows=1, descending=True)

    out = capsys.readouterr().out
    assert "Summary" in out
    assert "Missing from Table B" in out
    assert "Extra in Table B" in out
    assert "1 differences" in out


def test_build_report_document(files):
    report = compare_texts(TEXT_A, TEXT_B, "id")

    document = build_report_document(files["a"], files["b"], report)

    assert document["file_a"].endswith("a.csv")
    assert document["summary"]["total_mismatches"] == 0


def test_list_keys(files, capsys):
    assert list_keys(files["a"], files["b"]) == 0

    out = capsys.readouterr().out
    assert "Key candidates" in out
    assert "id" in out


def test_list_keys_no_shared_columns(write_csv):
    a = write_csv("left.csv", "id\n1\n")
    b = write_csv("right.csv", "code\n1\n")

    assert list_keys(a, b) == 0


def test_list_keys_error(tmp_path, files):
    assert list_keys(files["a"], str(tmp_path / "missing.csv")) == 1


def test_export_comparison(files, tmp_path):
    out_dir = tmp_path / "export"
    xlsx = tmp_path / "export" / "report.xlsx"

    result = export_comparison(files["a"], files["b"], "id", str(out_dir), xlsx=str(xlsx))

    assert result == 0
    assert (out_dir / "mismatches.csv").read_text(encoding="utf-8") == (
        "id,column,table_a,table_b\n1,name,x,X\n"
    )
    assert "Diff - name" in openpyxl.load_workbook(xlsx).sheetnames


def test_export_unknown_key_exit_one(files, tmp_path):
    assert export_comparison(files["a"], files["b"], "nope", str(tmp_path / "out")) == 1


def test_cli_no_command_prints_help(capsys):
    assert main([]) == 0


def test_cli_compare(files, tmp_path):
    output = tmp_path / "cli.json"

    result = main(["compare", files["a"], files["b"], "--key", "id", "--output", str(output)])

    assert result == 1
    assert json.loads(output.read_text(encoding="utf-8"))["summary"]["only_in_b"] == 1


def test_cli_compare_identical(files):
    assert main(["compare", files["a"], files["a_copy"], "--key", "id"]) == 0


def test_cli_duplicates_option(write_csv):
    a = write_csv("dup_a.csv", "id,v\n1,first\n")
    b = write_csv("dup_b.csv", "id,v\n1,first\n1,last\n")

    assert main(["compare", a, b, "--key", "id"]) == 1
    assert main(["compare", a, b, "--key", "id", "--duplicates", "first"]) == 0


def test_cli_negative_cap_is_error(files):
    assert main(["compare", files["a"], files["b"], "--key", "id", "--max-diffs", "-1"]) == 1


def test_cli_keys(files):
    assert main(["keys", files["a"], files["b"]]) == 0


def test_cli_export(files, tmp_path):
    out_dir = tmp_path / "cli_export"

    args = ["export", files["a"], files["b"], "--key", "id", "--output-dir", str(out_dir)]

    assert main(args) == 0
    assert (out_dir / "only_in_a.csv").exists()


def test_cli_export_requires_key(files, tmp_path):
    with pytest.raises(SystemExit):
        main(["export", files["a"], files["b"], "--output-dir", str(tmp_path)])


def test_export_control_characters(write_csv, tmp_path):
    """Control characters reach the CSV files unchanged and are dropped from the workbook."""
    a = write_csv("ctrl_a.csv", "id,v\n1,a\x01b\n")
    b = write_csv("ctrl_b.csv", "id,v\n")
    out_dir = tmp_path / "ctrl"
    xlsx = out_dir / "report.xlsx"

    assert export_comparison(a, b, "id", str(out_dir), xlsx=str(xlsx)) == 0
    assert (out_dir / "only_in_a.csv").read_text(encoding="utf-8") == "id,v\n1,a\x01b\n"
    assert openpyxl.load_workbook(xlsx)["Missing from B"]["B2"].value == "ab"


def test_cli_limit_rows_default(files, monkeypatch):
    import csv_table_compare.commands.compare as compare_module

    calls = {}

    def fake_compare_files(*args, **kwargs):
        calls.update(kwargs)
        return 0

    monkeypatch.setattr(compare_module, "compare_files", fake_compare_files)

    assert main(["compare", files["a"], files["b"]]) == 0
    assert calls["limit_rows"] == DEFAULT_LIMIT_ROWS
