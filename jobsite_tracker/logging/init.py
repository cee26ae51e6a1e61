from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

Every line written by the CLI starts with one of the labels
DEBUG|INFO|WARN|ERROR|SUMMARY so that scripts wrapping the tool can grep the
output. Standard logging only; modules log through child loggers of
``jobsite_tracker`` (``logging.getLogger(__name__)``).
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "get_logger",
    "log_summary",
    "reset_logging",
    "set_debug",
    "setup_logging",
]

LOGGER_NAME = "jobsite_tracker"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter producing ``LABEL message`` lines."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def setup_logging() -> logging.Logger:
    """Configure the package logger (idempotent) and return it.

    Output goes to stdout at INFO level; propagation to the root logger is
    disabled to avoid duplicate lines.
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the configured application logger, configuring it on first use."""
    if _logger is None:
        return setup_logging()
    return _logger


def set_debug(enabled: bool = True) -> None:
    """Switch the package logger and its handlers to DEBUG (or back to INFO)."""
    logger = get_logger()
    level = logging.DEBUG if enabled else logging.INFO
    for handler in logger.handlers:
        handler.setLevel(level)
    logger.setLevel(level)


def log_summary(message: str) -> None:
    """Log a message at SUMMARY level."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    _logger = None
