from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..models.row_data import RowData
from .classifier import is_filled

"""Header row detection and record building.

Real exports carry a few title/metadata rows above the header, so the header is
searched for within a small window of leading rows instead of being fixed to a
particular line.
"""

__all__ = [
    "DIVISION_COLUMN",
    "ROLL_COLUMNS",
    "locate_header",
    "header_columns",
    "build_records",
    "select_roll_column",
    "has_required_columns",
]

DIVISION_COLUMN = "Division"
ROLL_NUMBER_COLUMN = "Roll Number"
ROLL_COLUMN = "Roll"
ROLL_COLUMNS = (ROLL_NUMBER_COLUMN, ROLL_COLUMN)  # preference order

DEFAULT_SCAN_ROWS = 10


def _cell_text(value: Any) -> str:
    return str(value) if is_filled(value) else ""


def locate_header(raw_table: Sequence[Sequence[Any]], max_rows: int = DEFAULT_SCAN_ROWS) -> int | None:
    """Return the index of the first row naming both Division and Roll.

    Cells are compared lower-cased against "division" and "roll" / "roll number".
    At most ``max_rows`` rows are scanned; ``None`` means no header was found.
    """
    for index, row in enumerate(raw_table[:max_rows]):
        cells = {_cell_text(cell).lower() for cell in row}
        if DIVISION_COLUMN.lower() in cells and (
            ROLL_COLUMN.lower() in cells or ROLL_NUMBER_COLUMN.lower() in cells
        ):
            return index
    return None


def header_columns(raw_table: Sequence[Sequence[Any]], header_index: int) -> list[str]:
    """Column names of the header row, original case preserved."""
    return [_cell_text(cell) for cell in raw_table[header_index]]


def build_records(raw_table: Sequence[Sequence[Any]], header_index: int) -> list[RowData]:
    """Zip every row except the header row against the header column names.

    Rows above the header are kept as well; they normally fail the required
    field check later on. Cells missing from a short row become "".
    """
    columns = header_columns(raw_table, header_index)
    records: list[RowData] = []
    for index, row in enumerate(raw_table):
        if index == header_index:
            continue
        values: dict[str, Any] = {}
        for col_index, column in enumerate(columns):
            cell = row[col_index] if col_index < len(row) else None
            values[column] = "" if cell is None or (isinstance(cell, float) and cell != cell) else cell
        records.append(RowData(row_number=index + 1, values=values))
    return records


def select_roll_column(columns: Sequence[str]) -> str:
    """Prefer "Roll Number" over "Roll"."""
    return ROLL_NUMBER_COLUMN if ROLL_NUMBER_COLUMN in columns else ROLL_COLUMN


def has_required_columns(columns: Sequence[str]) -> bool:
    """Exact (case-sensitive) presence of Division and a roll column."""
    return DIVISION_COLUMN in columns and any(c in columns for c in ROLL_COLUMNS)
