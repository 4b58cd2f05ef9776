from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

"""SplitResult model: outcome of one pipeline run over a single raw table.

The pipeline never raises for the two expected failure states (header missing,
required columns missing); it reports them through ``SplitResult.status`` so the
caller can render a single status line and skip writing output.
"""

__all__ = [
    "SplitStatus",
    "SplitResult",
    "DivisionSheet",
]

# Rows of string cells: header row, then banner/data/separator rows.
DivisionSheet = list[list[str]]


class SplitStatus(Enum):
    """Status signal of a pipeline run.

    - SUCCESS: header found, required columns present, sheets assembled
    - HEADER_NOT_FOUND: no row within the scan window names Division and Roll
    - REQUIRED_COLUMNS_MISSING: header located but exact column names absent
    """
    SUCCESS = "success"
    HEADER_NOT_FOUND = "header_not_found"
    REQUIRED_COLUMNS_MISSING = "required_columns_missing"


@dataclass(frozen=True)
class SplitResult:
    """Pipeline output for one raw table.

    ``sheets`` is empty unless status is SUCCESS. ``columns`` holds the header
    that was found (also for REQUIRED_COLUMNS_MISSING, to aid diagnosis).
    """
    status: SplitStatus
    sheets: dict[str, DivisionSheet] = field(default_factory=dict)
    header_index: int | None = None
    columns: list[str] = field(default_factory=list)
    roll_column: str | None = None
    grouped_records: int = 0  # records that passed the grouping engine
    written_records: int = 0  # data rows across all emitted sheets
    dropped_missing_fields: int = 0
    dropped_unattached: int = 0
    unattached_rows: list[int] = field(default_factory=list)
    preview: list[dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is SplitStatus.SUCCESS

    @property
    def sheet_count(self) -> int:
        return len(self.sheets)

    @property
    def message(self) -> str:
        """Human readable status line."""
        if self.status is SplitStatus.HEADER_NOT_FOUND:
            return 'Could not detect header row containing "Division" and "Roll"'
        if self.status is SplitStatus.REQUIRED_COLUMNS_MISSING:
            return f"Required columns not found. Available columns: {', '.join(self.columns)}"
        return f"Excel processed! {self.sheet_count} sheets created with date headers preserved."
