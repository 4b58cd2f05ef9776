from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from dotenv import load_dotenv

from attendance_splitter.config.loader import ConfigError, load_config, resolve_config_path
from attendance_splitter.excel.reader import WorkbookReadError, read_raw_table
from attendance_splitter.logging.init import log_summary, set_debug, setup_logging
from attendance_splitter.models.config_models import SplitterConfig
from attendance_splitter.services.assembler import SheetNameCollisionError
from attendance_splitter.services.orchestrator import ProcessingError, process_all, scan_excel_files
from attendance_splitter.services.pipeline import split_divisions
from attendance_splitter.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config
- Collect input files (positional arguments, else scan source_directory)
- Split each export into a per-division workbook
- Print the SUMMARY line and exit with the contract exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; values override the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="attendance-splitter",
        description="Split attendance exports into one sheet per division, grouped by date",
    )
    p.add_argument("files", nargs="*", help="Excel exports to split (default: scan source_directory)")
    p.add_argument("--config", help="Config YAML path (default: config/splitter.yml)")
    p.add_argument("--output-dir", help="Override output_directory from the config")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data", action="store_true", help="Print detected header & first records then exit"
    )
    return p.parse_args(argv)


def _inspect_data(cfg: SplitterConfig, files: list[Path]) -> int:
    if not files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            sheet, raw = read_raw_table(f, keep_na_strings=cfg.keep_na_strings)
            result = split_divisions(
                raw,
                header_scan_rows=cfg.header_scan_rows,
                sheet_name_policy=cfg.sheet_name_policy,
                preview_rows=cfg.preview_rows,
            )
        except (WorkbookReadError, SheetNameCollisionError) as e:
            print(f"  error={e}")
            continue
        print(f"  SHEET: {sheet} rows={len(raw)} status={result.status.value}")
        if result.header_index is None:
            print(f"  {result.message}")
            continue
        print(f"  header_row={result.header_index + 1} cols={result.columns} roll_column={result.roll_column}")
        # datetime cells are not JSON friendly; show isoformat instead
        safe_rows = [
            {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in r.items()}
            for r in result.preview
        ]
        print("    sample_rows=", safe_rows)
        if result.ok:
            print(f"  divisions={list(result.sheets)} dropped_missing={result.dropped_missing_fields} "
                  f"dropped_unattached={result.dropped_unattached}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when called without arguments; cli_main([]) in tests
    # must not pick up pytest's own flags.
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(resolve_config_path(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    if args.output_dir:
        cfg = dataclasses.replace(cfg, output_directory=args.output_dir)

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    files: list[Path] | None
    if args.files:
        files = [Path(f) for f in args.files]
        missing = [f for f in files if not f.is_file()]
        if missing:
            logger.error(f"file not found: {', '.join(str(f) for f in missing)}")
            return EXIT_FATAL
        logger.info(f"Processing {len(files)} file(s)")
    else:
        directory = Path(cfg.source_directory)
        if not directory.exists():
            logger.error(f"directory not found: {directory}")
            return EXIT_FATAL
        files = None
        logger.info(f"Processing files from: {directory}")

    if args.inspect_data:
        try:
            targets = files if files is not None else scan_excel_files(Path(cfg.source_directory))
        except ProcessingError as e:
            logger.error(f"inspect: {e}")
            return EXIT_FATAL
        return _inspect_data(cfg, targets)

    try:
        result = process_all(cfg, files=files)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    logger.info(f"output={cfg.output_directory} sheets={result.total_sheets} rows={result.total_written_rows}")

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
