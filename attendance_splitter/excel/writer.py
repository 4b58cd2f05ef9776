from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import pandas as pd

from ..models.split_result import DivisionSheet

"""Excel writer: serialize division sheets into one workbook."""

__all__ = [
    "WorkbookWriteError",
    "write_workbook",
]


class WorkbookWriteError(Exception):
    """Raised when the output workbook cannot be written."""


def write_workbook(path: Path, sheets: Mapping[str, DivisionSheet]) -> Path:
    """Write one worksheet per entry of ``sheets``, in mapping order.

    Rows are written as-is: no DataFrame header, no index column.
    """
    if not sheets:
        raise WorkbookWriteError(f"no sheets to write for {path.name}")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for name, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=name, header=False, index=False)
    except Exception as e:
        raise WorkbookWriteError(f"cannot write {path.name}: {e}") from e
    return path
