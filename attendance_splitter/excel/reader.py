from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

"""Excel reader: decode the first worksheet of an export into a raw table.

The sheet is read without a header (the header row is located later by the
pipeline) and with ``dtype=object`` so integer cells stay integers instead of
being widened to floats by columns that contain blanks.
"""

__all__ = [
    "WorkbookReadError",
    "read_raw_table",
    "frame_to_raw_table",
]


class WorkbookReadError(Exception):
    """Raised when a workbook cannot be opened or has no worksheet."""


def frame_to_raw_table(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a headerless DataFrame to rows of cells, NaN -> None."""
    obj = df.astype(object)
    return obj.where(pd.notna(obj), None).values.tolist()


def read_raw_table(
    path: Path, keep_na_strings: list[str] | None = None
) -> tuple[str, list[list[Any]]]:
    """Read the first worksheet of ``path``.

    Parameters
    ----------
    path: Excel file path
    keep_na_strings: strings excluded from pandas' default NaN conversion
        (e.g. ['NA'] for a division literally named "NA")

    Returns
    -------
    (sheet name, raw table)
    """
    # pandas._libs.parsers.STR_NA_VALUES holds the default NA string set
    import pandas._libs.parsers as parsers

    if keep_na_strings:
        na_values = list(parsers.STR_NA_VALUES - set(keep_na_strings))
        keep_default_na = False
    else:
        na_values = None
        keep_default_na = True

    try:
        xls = pd.ExcelFile(path)
    except Exception as e:
        raise WorkbookReadError(f"cannot open workbook {path.name}: {e}") from e
    if not xls.sheet_names:
        raise WorkbookReadError(f"workbook {path.name} has no worksheets")
    name = str(xls.sheet_names[0])
    try:
        df = xls.parse(
            xls.sheet_names[0],
            header=None,
            dtype=object,
            keep_default_na=keep_default_na,
            na_values=na_values,
        )
    except Exception as e:
        raise WorkbookReadError(f"cannot parse sheet '{name}' of {path.name}: {e}") from e
    return name, frame_to_raw_table(df)
