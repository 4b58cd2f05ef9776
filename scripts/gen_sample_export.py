#!/usr/bin/env python3
"""Generate a synthetic attendance export for manual runs and demos.

Layout of the generated first worksheet:
- A couple of title/metadata rows
- Header row: Division, Roll Number, Name, Status
- Per day: a date banner ("Wed 5th Jun 2024") followed by shuffled records of
  every division, with an occasional blank line
"""
from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def banner_text(d: date) -> str:
    return f"{WEEKDAYS[d.weekday()]} {ordinal(d.day)} {MONTHS[d.month - 1]} {d.year}"


def generate_rows(
    divisions: list[str], students: int, days: int, start: date, seed: int = 42
) -> list[list[Any]]:
    """Build the raw rows of an export (title rows included)."""
    rng = np.random.default_rng(seed)
    rows: list[list[Any]] = [
        ["Attendance Export", "", "", ""],
        [f"Generated for {len(divisions)} divisions", "", "", ""],
        ["Division", "Roll Number", "Name", "Status"],
    ]
    for offset in range(days):
        rows.append([banner_text(start + timedelta(days=offset)), "", "", ""])
        day_rows = [
            [div, f"{div[:1]}{roll:02d}", f"Student {div}-{roll}", rng.choice(["P", "A"])]
            for div in divisions
            for roll in range(1, students + 1)
        ]
        for i in rng.permutation(len(day_rows)):
            rows.append(day_rows[i])
            if rng.random() < 0.05:
                rows.append(["", "", "", ""])
    return rows


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a synthetic attendance export")
    parser.add_argument("output", type=Path, help="Output .xlsx path")
    parser.add_argument("--divisions", default="A,B,C", help="Comma separated division names")
    parser.add_argument("--students", type=int, default=20, help="Students per division")
    parser.add_argument("--days", type=int, default=5, help="Number of date banners")
    parser.add_argument("--start", type=date.fromisoformat, default=date(2024, 6, 3), help="First day (ISO)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    divisions = [d.strip() for d in args.divisions.split(",") if d.strip()]
    if not divisions:
        print("no divisions given", file=sys.stderr)
        return 1
    rows = generate_rows(divisions, args.students, args.days, args.start, seed=args.seed)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(args.output, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name="Attendance", header=False, index=False)
    print(f"wrote {len(rows)} rows to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
