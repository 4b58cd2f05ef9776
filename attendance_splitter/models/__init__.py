"""Domain models for the attendance division splitter.

This package contains the record, result and configuration models shared by the
pipeline services, the orchestrator and the CLI.
"""

from .config_models import SplitterConfig
from .row_data import GroupedRecord, RowData
from .split_result import DivisionSheet, SplitResult, SplitStatus

__all__ = [
    # Configuration models
    "SplitterConfig",
    # Record models
    "RowData",
    "GroupedRecord",
    # Pipeline output
    "DivisionSheet",
    "SplitResult",
    "SplitStatus",
]
