# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("ATTENDANCE_SPLITTER_CONFIG", raising=False)
        monkeypatch.delenv("ATTENDANCE_SPLITTER_OUTPUT_DIR", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
header_scan_rows: 10
output_names:
  core.xlsx: DJCSI Core Attendance.xlsx
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "splitter.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def scenario_a_rows() -> list[list[object]]:
    """Two title rows, header at index 2, two date banners."""
    return [
        ["DJCSI Attendance"],
        ["Exported 2024-06-07"],
        ["Division", "Roll Number", "Name"],
        ["Wed 5th Jun 2024"],
        ["A", "12", "X"],
        ["A", "7", "Y"],
        ["Thu 6th Jun 2024"],
        ["A", "3", "Z"],
    ]


def write_export(path: Path, rows: list[list[object]], sheet_name: str = "Attendance") -> Path:
    """Write ``rows`` as a headerless worksheet."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


def read_output(path: Path) -> dict[str, list[list[str]]]:
    """Read every sheet of a written workbook as rows of strings ("" for blanks)."""
    frames = pd.read_excel(path, sheet_name=None, header=None, dtype=object)
    return {
        name: [["" if pd.isna(v) else str(v) for v in row] for row in df.values.tolist()]
        for name, df in frames.items()
    }


@pytest.fixture()
def make_export(temp_workdir: Path) -> Callable[..., Path]:
    def _make(name: str, rows: list[list[object]], directory: str = "data") -> Path:
        return write_export(temp_workdir / directory / name, rows)
    return _make


@pytest.fixture()
def read_workbook() -> Callable[[Path], dict[str, list[list[str]]]]:
    return read_output
