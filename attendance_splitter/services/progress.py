from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display with tqdm (TTY only).

A single file-level bar is shown on interactive terminals; in non-TTY
environments (CI, redirected output) nothing is drawn so logs stay free of
control sequences. Within a file, a plain one-line indicator lists the division
sheets being written.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
    "DivisionProgressIndicator",
]


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """File-level progress bar."""

    def __init__(self, total_files: int, *, description: str = "Splitting files") -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1
        if self.enabled and self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, success: bool = True) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def set_postfix(self, **kwargs: Any) -> None:
        """Show running stats (success/failed/sheets) next to the bar."""
        if self.enabled and self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class DivisionProgressIndicator:
    """One-line listing of the division sheets produced for a file.

    Assembly of a file is fast, so no bar is drawn; the indicator just prints
    each sheet with its row count once the workbook is written.
    """

    def __init__(self, file_name: str, total_sheets: int) -> None:
        self.file_name = file_name
        self.total_sheets = total_sheets
        self.enabled = is_tty_enabled()

    def report(self, sheets: dict[str, list[list[str]]]) -> None:
        if not self.enabled:
            return
        for index, (name, rows) in enumerate(sheets.items(), start=1):
            # header row excluded
            print(f"  Sheet {index}/{self.total_sheets}: {name} - {max(len(rows) - 1, 0)} rows")
