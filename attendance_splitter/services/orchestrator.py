from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import WorkbookReadError, read_raw_table
from ..excel.writer import WorkbookWriteError, write_workbook
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import SplitterConfig
from ..models.excel_file import ExcelFile, FileStatus
from ..models.processing_result import FileStat, ProcessingResult
from ..models.split_result import SplitStatus
from .assembler import SheetNameCollisionError
from .pipeline import split_divisions
from .progress import DivisionProgressIndicator, ProgressTracker

"""Service orchestration for the attendance division splitter.

Coordinates a run: scanning the source directory, reading each export, running
the splitting pipeline, writing one division workbook per export, recording
errors and aggregating metrics. Every file is independent; a failing file never
stops the run and never leaves a partial output workbook behind.
"""

logger = logging.getLogger(__name__)

FILE_LEVEL = "<FILE_LEVEL>"


class ProcessingError(Exception):
    """Fatal error that prevents the run from starting."""


def scan_excel_files(directory: Path) -> list[Path]:
    """List .xlsx files in ``directory`` (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == ".xlsx")
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def process_all(config: SplitterConfig, files: Iterable[Path] | None = None) -> ProcessingResult:
    """Split every export of a run.

    Args:
        config: Splitter configuration
        files: Explicit input files; None scans ``config.source_directory``

    Returns:
        ProcessingResult with aggregated metrics and file stats

    Raises:
        ProcessingError: If the source directory cannot be scanned
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer()

    if files is None:
        file_paths = scan_excel_files(Path(config.source_directory))
    else:
        file_paths = [Path(f) for f in files]

    if Path(config.output_directory).resolve() == Path(config.source_directory).resolve():
        logger.warning("output_directory equals source_directory; written workbooks will be picked up by the next run")

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_sheets = 0
    total_rows = 0
    dropped_missing = 0
    dropped_unattached = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)

            file_result = _process_single_file(file_path, config, error_log)
            elapsed = (file_result.end_time - file_result.start_time).total_seconds()

            if file_result.status == FileStatus.SUCCESS:
                success_count += 1
                total_sheets += file_result.sheet_count
                total_rows += file_result.written_records
                dropped_missing += file_result.dropped_missing_fields
                dropped_unattached += file_result.dropped_unattached
            else:
                failed_count += 1

            progress.set_postfix(success=success_count, failed=failed_count, sheets=total_sheets)
            progress.finish_file(success=(file_result.status == FileStatus.SUCCESS))

            file_stats.append(
                FileStat(
                    file_name=file_path.name,
                    status=file_result.status.value,
                    sheet_count=file_result.sheet_count,
                    written_records=file_result.written_records,
                    elapsed_seconds=elapsed,
                    dropped_missing_fields=file_result.dropped_missing_fields,
                    dropped_unattached=file_result.dropped_unattached,
                )
            )

    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.warning("could not write error log: %s", e)
    else:
        if log_path is not None:
            logger.info("error log: %s", log_path)

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput_rps = total_rows / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_sheets=total_sheets,
        total_written_rows=total_rows,
        dropped_missing_fields=dropped_missing,
        dropped_unattached=dropped_unattached,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput_rps,
        file_stats=file_stats,
    )


def _failed(file_path: Path, start_time: datetime, error: str, **counters: int) -> ExcelFile:
    return ExcelFile(
        path=file_path,
        name=file_path.name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.FAILED,
        error=error,
        **counters,
    )


def _process_single_file(file_path: Path, config: SplitterConfig, error_log: ErrorLogBuffer) -> ExcelFile:
    """Read, split and write one export.

    Errors are recorded in ``error_log`` and reflected in the returned
    ExcelFile status; nothing is raised.
    """
    start_time = datetime.now(UTC)
    name = file_path.name
    sheet = FILE_LEVEL

    try:
        try:
            sheet, raw_table = read_raw_table(file_path, keep_na_strings=config.keep_na_strings)
        except WorkbookReadError as e:
            logger.error("%s: %s", name, e)
            error_log.append(ErrorRecord.create(name, FILE_LEVEL, -1, "READ_ERROR", str(e)))
            return _failed(file_path, start_time, str(e))

        try:
            result = split_divisions(
                raw_table,
                header_scan_rows=config.header_scan_rows,
                sheet_name_policy=config.sheet_name_policy,
                preview_rows=config.preview_rows,
            )
        except SheetNameCollisionError as e:
            logger.error("%s: %s", name, e)
            error_log.append(ErrorRecord.create(name, sheet, -1, "SHEET_NAME_COLLISION", str(e)))
            return _failed(file_path, start_time, str(e))

        if not result.ok:
            logger.error("%s: %s", name, result.message)
            error_type = (
                "HEADER_NOT_FOUND" if result.status is SplitStatus.HEADER_NOT_FOUND else "REQUIRED_COLUMNS_MISSING"
            )
            row = result.header_index + 1 if result.header_index is not None else -1
            error_log.append(ErrorRecord.create(name, sheet, row, error_type, result.message))
            return _failed(file_path, start_time, result.message)

        if result.unattached_rows:
            logger.warning(
                "%s: %d record(s) before the first date banner were left out",
                name,
                result.dropped_unattached,
            )
            error_log.extend(
                ErrorRecord.create(name, sheet, row, "UNATTACHED_RECORD", "record precedes any date banner")
                for row in result.unattached_rows
            )

        counters = {
            "sheet_count": result.sheet_count,
            "written_records": result.written_records,
            "dropped_missing_fields": result.dropped_missing_fields,
            "dropped_unattached": result.dropped_unattached,
        }
        output_path = config.output_path_for(file_path)
        try:
            write_workbook(output_path, result.sheets)
        except WorkbookWriteError as e:
            logger.error("%s: %s", name, e)
            error_log.append(ErrorRecord.create(name, sheet, -1, "WRITE_ERROR", str(e)))
            return _failed(file_path, start_time, str(e), **counters)

        DivisionProgressIndicator(name, result.sheet_count).report(result.sheets)
        logger.info("%s: %s -> %s", name, result.message, output_path)
        return ExcelFile(
            path=file_path,
            name=name,
            output_path=output_path,
            start_time=start_time,
            end_time=datetime.now(UTC),
            status=FileStatus.SUCCESS,
            **counters,
        )

    except Exception as e:
        logger.exception("%s: unexpected error", name)
        error_log.append(ErrorRecord.create(name, sheet, -1, "UNEXPECTED_ERROR", str(e)))
        return _failed(file_path, start_time, f"Error processing file: {e}")
