from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result models for the attendance division splitter.

Aggregated metrics for the SUMMARY output line and per-file statistics.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics (internal helper for ProcessingResult)."""
    file_name: str
    status: str  # success/failed
    sheet_count: int
    written_records: int
    elapsed_seconds: float
    dropped_missing_fields: int = 0
    dropped_unattached: int = 0


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results and summary output for a run."""
    success_files: int
    failed_files: int
    total_sheets: int  # division sheets written across all files
    total_written_rows: int  # data rows written across all files
    dropped_missing_fields: int
    dropped_unattached: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float  # total_written_rows / elapsed
    file_stats: list[FileStat] | None = None
