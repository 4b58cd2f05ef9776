from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""ExcelFile domain model and FileStatus enum.

ExcelFile is the processing context for a single attendance export, tracking its
status from discovery to success/failed together with the counters of the
pipeline run that produced (or refused to produce) its division workbook.
"""


class FileStatus(Enum):
    """Status enum for ExcelFile processing lifecycle.

    State transitions: pending → processing → (success | failed)
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ExcelFile:
    """Processing context for a single Excel export."""
    path: Path                           # Input workbook
    name: str                            # Input file name
    output_path: Path | None = None      # Written workbook (None when nothing was written)
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: FileStatus = FileStatus.PENDING
    sheet_count: int = 0                 # Division sheets written
    written_records: int = 0             # Data rows across written sheets
    dropped_missing_fields: int = 0
    dropped_unattached: int = 0
    error: str | None = None             # Failure reason / status message
