from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""Record models for the attendance division splitter.

RowData is one raw sheet row zipped against the header row. GroupedRecord is a
RowData that survived the grouping pass and carries its date banner and sort key.
"""

__all__ = [
    "RowData",
    "GroupedRecord",
]


@dataclass(frozen=True)
class RowData:
    """Logical representation of a single non-header row.

    ``row_number`` is the 1-based row in the source sheet (diagnostics only).
    ``values`` maps column name to cell value in header order; cells missing
    from the raw row are stored as empty strings.
    """
    row_number: int
    values: dict[str, Any]

    def get(self, column: str, default: Any = None) -> Any:
        return self.values.get(column, default)


@dataclass(frozen=True)
class GroupedRecord:
    """A data record tagged with its date banner and numeric sort key."""
    row_number: int
    values: dict[str, Any]
    date_group: str | None  # None: no banner seen before this row
    sort_key: float  # int in practice, math.inf when the roll has no digits

    @property
    def division(self) -> Any:
        return self.values.get("Division")
