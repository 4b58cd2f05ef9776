from __future__ import annotations

import math
import re
from collections.abc import Sequence
from typing import Any

"""Row classification and roll-number sort keys.

Both helpers are pure and total: they accept any cell value the Excel adapter
can produce (str, int, float, bool, datetime, None, NaN) and never raise.
"""

__all__ = [
    "DATE_BANNER_PATTERN",
    "is_filled",
    "is_date_row",
    "extract_sort_key",
]

# e.g. "Mon 3rd Jun 2024"; case-sensitive, anchored at both ends
DATE_BANNER_PATTERN = re.compile(
    r"^(Mon|Tue|Wed|Thu|Fri|Sat|Sun)\s+\d{1,2}(st|nd|rd|th)\s+"
    r"(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+\d{4}$"
)

_DIGIT_RUN = re.compile(r"[0-9]+")


def is_filled(value: Any) -> bool:
    """Truthiness of a cell value, treating NaN like an empty cell."""
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def is_date_row(row: Sequence[Any]) -> bool:
    """Return True when the first cell of ``row`` is a date banner.

    Only the first cell is inspected. An empty row or an empty first cell is
    never a banner.
    """
    if not row or not is_filled(row[0]):
        return False
    first_cell = str(row[0]).strip()
    return DATE_BANNER_PATTERN.match(first_cell) is not None


def extract_sort_key(value: Any) -> float:
    """Numeric key from the first run of digits in ``value``.

    >>> extract_sort_key("R-09A")
    9
    >>> extract_sort_key("")
    inf
    """
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return math.inf
    match = _DIGIT_RUN.search(str(value))
    if match is None:
        return math.inf
    return int(match.group(0))
