from __future__ import annotations

import math
from datetime import datetime

import pytest

from attendance_splitter.services.classifier import extract_sort_key, is_date_row, is_filled


@pytest.mark.parametrize(
    "cell",
    [
        "Mon 3rd Jun 2024",
        "Wed 5th Jun 2024",
        "Sun 21st Jan 2024",
        "Tue 2nd Dec 1999",
        "  Thu 6th Jun 2024  ",  # trimmed before matching
        "Fri  14th   Feb 2025",  # runs of whitespace between parts
    ],
)
def test_is_date_row_matches_banners(cell):
    assert is_date_row([cell, "", ""]) is True


@pytest.mark.parametrize(
    "cell",
    [
        "Mon 3rd Jun 2024 notes",  # trailing text
        "Week of Mon 3rd Jun 2024",  # leading text
        "mon 3rd jun 2024",  # case-sensitive abbreviations
        "Monday 3rd Jun 2024",
        "Mon 3 Jun 2024",  # ordinal suffix required
        "Mon 123rd Jun 2024",
        "Mon 3rd June 2024",
        "Mon 3rd Jun 24",
        "A",
    ],
)
def test_is_date_row_rejects_non_banners(cell):
    assert is_date_row([cell]) is False


def test_is_date_row_only_inspects_first_cell():
    assert is_date_row(["A", "Mon 3rd Jun 2024"]) is False
    assert is_date_row(["Mon 3rd Jun 2024", "A", "12"]) is True


@pytest.mark.parametrize("row", [[], [None], [""], [float("nan")], [0], [False]])
def test_is_date_row_empty_first_cell(row):
    assert is_date_row(row) is False


def test_is_date_row_non_string_first_cell():
    assert is_date_row([datetime(2024, 6, 3)]) is False
    assert is_date_row([42]) is False


@pytest.mark.parametrize(
    "value,expected",
    [
        ("R-09A", 9),
        ("12", 12),
        (12, 12),
        ("A23", 23),
        ("23B7", 23),
        ("007", 7),
        (0, 0),
        ("0", 0),
        (12.5, 12),
        ("  45 ", 45),
    ],
)
def test_extract_sort_key_first_digit_run(value, expected):
    assert extract_sort_key(value) == expected


@pytest.mark.parametrize("value", [None, "", "ABC", "-", float("nan"), True, False])
def test_extract_sort_key_infinity_sentinel(value):
    assert extract_sort_key(value) == math.inf


def test_extract_sort_key_is_idempotent_on_equal_values():
    assert extract_sort_key("R-09A") == extract_sort_key("R-09A")
    assert extract_sort_key(None) == extract_sort_key("")


def test_extract_sort_key_never_raises_for_odd_types():
    for value in (object(), [1, 2], {"a": 3}, b"5", datetime(2024, 6, 3)):
        key = extract_sort_key(value)
        assert key == math.inf or (isinstance(key, int) and key >= 0)


def test_is_filled_treats_nan_as_blank():
    assert is_filled(float("nan")) is False
    assert is_filled(None) is False
    assert is_filled("") is False
    assert is_filled(" ") is True
    assert is_filled("A") is True
    assert is_filled(7) is True
