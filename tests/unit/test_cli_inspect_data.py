from __future__ import annotations

from pathlib import Path

from attendance_splitter.cli import main as cli_main
from attendance_splitter.logging.init import reset_logging


def test_inspect_data_prints_header_and_divisions(write_config, make_export, scenario_a_rows, temp_workdir: Path,
                                                  capsys):
    reset_logging()
    make_export("core.xlsx", scenario_a_rows)

    code = cli_main(["--inspect-data"])

    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: core.xlsx" in out
    assert "SHEET: Attendance rows=8 status=success" in out
    assert "header_row=3 cols=['Division', 'Roll Number', 'Name'] roll_column=Roll Number" in out
    assert "sample_rows=" in out
    assert "divisions=['A'] dropped_missing=2 dropped_unattached=0" in out
    # inspection never writes output or a SUMMARY line
    assert not (temp_workdir / "out").exists()
    assert "SUMMARY" not in out


def test_inspect_data_reports_missing_header(write_config, make_export, temp_workdir: Path, capsys):
    reset_logging()
    make_export("plain.xlsx", [["Name"], ["x"]])

    code = cli_main(["--inspect-data"])

    out = capsys.readouterr().out
    assert code == 0
    assert "status=header_not_found" in out
    assert 'Could not detect header row containing "Division" and "Roll"' in out


def test_inspect_data_unreadable_file(write_config, temp_workdir: Path, capsys):
    reset_logging()
    (temp_workdir / "data" / "broken.xlsx").write_bytes(b"garbage")

    code = cli_main(["--inspect-data"])

    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: broken.xlsx" in out
    assert "error=cannot open workbook broken.xlsx" in out


def test_inspect_data_no_files(write_config, temp_workdir: Path, capsys):
    reset_logging()
    assert cli_main(["--inspect-data"]) == 0
    assert "inspect: no .xlsx files" in capsys.readouterr().out
