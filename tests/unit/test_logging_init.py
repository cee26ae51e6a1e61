from __future__ import annotations

import logging
from io import StringIO

import jobsite_tracker.logging.init as log_init
from jobsite_tracker.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    set_debug,
    setup_logging,
)


def _capture(logger: logging.Logger) -> StringIO:
    """Point the logger's single handler at a StringIO."""
    stream = StringIO()
    logger.handlers[0].setStream(stream)
    return stream


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == "jobsite_tracker"
    assert logger.level == logging.INFO
    assert logger.propagate is False
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)


def test_logging_labeled_prefixes():
    """Every line starts with INFO|WARN|ERROR|SUMMARY."""
    logger = setup_logging()
    stream = _capture(logger)

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")

    lines = stream.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_child_loggers_use_package_handler():
    logger = setup_logging()
    stream = _capture(logger)
    logging.getLogger(f"{LOGGER_NAME}.csvio.parser").warning("csv: missing columns")
    assert stream.getvalue() == "WARN csv: missing columns\n"


def test_setup_logging_idempotent():
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1


def test_get_logger_returns_configured_logger():
    assert get_logger() is setup_logging()


def test_debug_messages_hidden_until_set_debug():
    logger = setup_logging()
    stream = _capture(logger)
    logger.debug("hidden")
    set_debug()
    logger.debug("shown")
    assert stream.getvalue() == "DEBUG shown\n"
    set_debug(False)
    assert logger.level == logging.INFO


def test_log_summary_convenience_function():
    logger = setup_logging()
    stream = _capture(logger)
    log_summary("files=2/2 success=2 failed=0 rows=150 elapsed_sec=2.5 throughput_rps=60")
    assert stream.getvalue().strip() == (
        "SUMMARY files=2/2 success=2 failed=0 rows=150 elapsed_sec=2.5 throughput_rps=60"
    )
    assert logging.getLevelName(SUMMARY_LEVEL) == "SUMMARY"


def test_reset_logging_forgets_logger():
    setup_logging()
    log_init.reset_logging()
    assert log_init._logger is None
