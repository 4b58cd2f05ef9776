from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..models.row_data import GroupedRecord
from ..models.split_result import DivisionSheet
from .classifier import is_filled

"""Sheet assembler: one ordered table per division.

Layout of every table::

    header
    <banner>            first cell only, the rest blank
    <records...>        ascending sort key, ties keep file order
    <blank>             separator, dropped after the last block
    <banner>
    ...

Records without a date banner never reach the output. A division whose records
are all ungrouped still produces a header-only table.
"""

__all__ = [
    "SHEET_NAME_LIMIT",
    "SheetNameCollisionError",
    "sheet_name",
    "render_cell",
    "assemble_sheets",
]

SHEET_NAME_LIMIT = 31  # Excel worksheet name limit


class SheetNameCollisionError(Exception):
    """Raised when two divisions truncate to the same worksheet name."""

    def __init__(self, name: str, divisions: Sequence[Any]) -> None:
        self.name = name
        self.divisions = list(divisions)
        super().__init__(
            f"divisions {', '.join(repr(str(d)) for d in self.divisions)} "
            f"share sheet name {name!r}"
        )


def sheet_name(division: Any) -> str:
    return str(division)[:SHEET_NAME_LIMIT]


def _suffixed_name(base: str, used: set[str]) -> str:
    name = base
    idx = 2
    while name in used:
        suffix = f" ({idx})"
        name = (base[: max(0, SHEET_NAME_LIMIT - len(suffix))] + suffix)[:SHEET_NAME_LIMIT]
        idx += 1
    return name


def render_cell(value: Any) -> str:
    return str(value) if is_filled(value) else ""


def assemble_sheets(
    grouped_records: Sequence[GroupedRecord],
    columns: Sequence[str] | None = None,
    sheet_name_policy: str = "truncate",
) -> dict[str, DivisionSheet]:
    """Partition records by division and lay out one table per division.

    ``columns`` defaults to the keys of the first record. With the ``truncate``
    policy two divisions sharing their first 31 characters raise
    SheetNameCollisionError; with ``suffix`` the later one gets " (2)", " (3)"...
    """
    if sheet_name_policy not in ("truncate", "suffix"):
        raise ValueError(f"unknown sheet_name_policy: {sheet_name_policy!r}")
    if columns is None:
        columns = list(grouped_records[0].values.keys()) if grouped_records else []
    columns = list(dict.fromkeys(columns))
    width = len(columns)

    by_division: dict[Any, list[GroupedRecord]] = {}
    for record in grouped_records:
        by_division.setdefault(record.division, []).append(record)

    sheets: dict[str, DivisionSheet] = {}
    owners: dict[str, Any] = {}
    for division, division_records in by_division.items():
        rows: DivisionSheet = [list(columns)]

        blocks: dict[str, list[GroupedRecord]] = {}
        for record in division_records:
            if record.date_group:
                blocks.setdefault(record.date_group, []).append(record)

        for banner, block in blocks.items():
            rows.append([banner] + [""] * (width - 1) if width else [banner])
            # sorted() is stable, so equal keys keep their file order
            for record in sorted(block, key=lambda r: r.sort_key):
                rows.append([render_cell(record.values.get(col)) for col in columns])
            rows.append([""] * width)

        if len(rows) > 1 and all(cell == "" for cell in rows[-1]):
            rows.pop()

        name = sheet_name(division)
        if name in sheets:
            if sheet_name_policy == "truncate":
                raise SheetNameCollisionError(name, [owners[name], division])
            name = _suffixed_name(name, set(sheets))
        sheets[name] = rows
        owners[name] = division
    return sheets
