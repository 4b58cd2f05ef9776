from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..models.row_data import GroupedRecord, RowData
from .classifier import extract_sort_key, is_date_row, is_filled
from .header import DIVISION_COLUMN

"""Grouping engine: attach date banners and sort keys to data records."""

__all__ = [
    "GroupingOutcome",
    "group_by_date",
]


@dataclass
class GroupingOutcome:
    records: list[GroupedRecord] = field(default_factory=list)
    banners: list[str] = field(default_factory=list)  # banner texts in row order
    dropped_missing_fields: int = 0


def group_by_date(records: Iterable[RowData], roll_column: str) -> GroupingOutcome:
    """Single left-to-right pass threading the current date banner.

    A banner row switches the current group and is not emitted. A data row is
    emitted only when both Division and ``roll_column`` are filled; otherwise it
    is counted in ``dropped_missing_fields`` (blank lines, title rows, ...).
    Rows seen before the first banner are emitted with ``date_group=None``.
    """
    outcome = GroupingOutcome()
    current_group: str | None = None
    for record in records:
        if is_date_row(list(record.values.values())):
            current_group = str(next(iter(record.values.values()))).strip()
            outcome.banners.append(current_group)
            continue
        division = record.get(DIVISION_COLUMN)
        roll = record.get(roll_column)
        if not (is_filled(division) and is_filled(roll)):
            outcome.dropped_missing_fields += 1
            continue
        outcome.records.append(
            GroupedRecord(
                row_number=record.row_number,
                values=record.values,
                date_group=current_group,
                sort_key=extract_sort_key(roll),
            )
        )
    return outcome
