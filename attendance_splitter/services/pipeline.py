from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..models.split_result import SplitResult, SplitStatus
from .assembler import assemble_sheets
from .grouping import group_by_date
from .header import (
    DEFAULT_SCAN_ROWS,
    build_records,
    has_required_columns,
    header_columns,
    locate_header,
    select_roll_column,
)

"""Division splitting pipeline over one raw table.

Header Locator -> required column check -> Record Builder -> Grouping Engine
-> Sheet Assembler. The pipeline holds no state between calls and performs no
I/O; reading and writing workbooks is left to the orchestrator.
"""

__all__ = [
    "split_divisions",
]

logger = logging.getLogger(__name__)


def split_divisions(
    raw_table: Sequence[Sequence[Any]],
    header_scan_rows: int = DEFAULT_SCAN_ROWS,
    sheet_name_policy: str = "truncate",
    preview_rows: int = 10,
) -> SplitResult:
    """Split one raw attendance table into per-division sheets.

    Args:
        raw_table: Rows of cell values as decoded from the first worksheet
        header_scan_rows: How many leading rows may hold the header
        sheet_name_policy: "truncate" or "suffix" (see assemble_sheets)
        preview_rows: Number of built records copied into ``SplitResult.preview``

    Returns:
        SplitResult; ``sheets`` is empty unless status is SUCCESS

    Raises:
        SheetNameCollisionError: two divisions truncate to one sheet name under
            the "truncate" policy
    """
    header_index = locate_header(raw_table, max_rows=header_scan_rows)
    if header_index is None:
        logger.debug("no header row within first %d rows", header_scan_rows)
        return SplitResult(status=SplitStatus.HEADER_NOT_FOUND)

    columns = header_columns(raw_table, header_index)
    records = build_records(raw_table, header_index)
    preview = [dict(r.values) for r in records[:preview_rows]]
    roll_column = select_roll_column(columns)

    if not has_required_columns(columns):
        logger.debug("header at row %d lacks exact Division/Roll names: %s", header_index + 1, columns)
        return SplitResult(
            status=SplitStatus.REQUIRED_COLUMNS_MISSING,
            header_index=header_index,
            columns=columns,
            preview=preview,
        )

    outcome = group_by_date(records, roll_column)
    unattached = [r.row_number for r in outcome.records if not r.date_group]
    sheets = assemble_sheets(outcome.records, columns=columns, sheet_name_policy=sheet_name_policy)
    logger.debug(
        "header_row=%d roll_column=%s banners=%d grouped=%d dropped_missing=%d unattached=%d",
        header_index + 1,
        roll_column,
        len(outcome.banners),
        len(outcome.records),
        outcome.dropped_missing_fields,
        len(unattached),
    )
    return SplitResult(
        status=SplitStatus.SUCCESS,
        sheets=sheets,
        header_index=header_index,
        columns=columns,
        roll_column=roll_column,
        grouped_records=len(outcome.records),
        written_records=len(outcome.records) - len(unattached),
        dropped_missing_fields=outcome.dropped_missing_fields,
        dropped_unattached=len(unattached),
        unattached_rows=unattached,
        preview=preview,
    )
