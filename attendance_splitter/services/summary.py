from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering."""


def _format_number(value: float) -> str:
    # integers without decimals, tiny values without scientific notation
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render a SUMMARY line from a ProcessingResult.

    Format::

        SUMMARY files={total}/{total} success={s} failed={f} sheets={k} rows={r}
        dropped_missing={m} dropped_unattached={u} elapsed_sec={e} throughput_rps={t}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 6, 5, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 6, 5, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_sheets=3, total_written_rows=120,
        ...     dropped_missing_fields=4, dropped_unattached=0, start_time=start,
        ...     end_time=end, elapsed_seconds=2.0, throughput_rows_per_sec=60.0
        ... )
        >>> render_summary_line(1, result)  # doctest: +ELLIPSIS
        'SUMMARY files=1/1 success=1 failed=0 sheets=3 rows=120 dropped_missing=4 ...'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"sheets={result.total_sheets} "
        f"rows={result.total_written_rows} "
        f"dropped_missing={result.dropped_missing_fields} "
        f"dropped_unattached={result.dropped_unattached} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )
