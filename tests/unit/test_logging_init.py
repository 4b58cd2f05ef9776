from __future__ import annotations

import logging
from io import StringIO

import pytest

from attendance_splitter.logging import init as log_init
from attendance_splitter.logging.init import (
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    set_debug,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == "attendance_splitter"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_logging_labeled_prefixes():
    captured_output = StringIO()
    logger = logging.getLogger("test_attendance_splitter")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(25, "SUMMARY")
    handler = logging.StreamHandler(captured_output)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(25, "Test summary message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_setup_logging_idempotent():
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1
    assert get_logger() is logger1


def test_module_loggers_propagate_into_application_logger(capsys):
    setup_logging()
    logging.getLogger("attendance_splitter.services.orchestrator").warning("late banner")
    assert "WARN late banner" in capsys.readouterr().out


def test_set_debug_toggles_levels(capsys):
    logger = setup_logging()
    set_debug(True)
    logger.debug("visible")
    set_debug(False)
    logger.debug("hidden")
    out = capsys.readouterr().out
    assert "DEBUG visible" in out
    assert "hidden" not in out


def test_log_summary_uses_summary_label(capsys):
    setup_logging()
    log_summary("files=1/1 success=1")
    assert "SUMMARY files=1/1 success=1" in capsys.readouterr().out
    assert logging.getLevelName(log_init.SUMMARY_LEVEL) == "SUMMARY"
