"""
log_config.py — Logging setup with labeled prefixes.

Messages render as "[LEVEL] message", matching the [OK]/[INFO]/[ERROR]
labels used across the backend. An extra OK level sits between INFO
and WARNING for completed exports.
"""

from __future__ import annotations

import logging
import sys

from .constants import LOG_FORMAT_ERROR, LOG_FORMAT_INFO, LOG_FORMAT_OK, LOG_FORMAT_WARNING

OK_LEVEL = 25
ROOT_LOGGER_NAME = "tabular_export"

_configured = False


class LabeledFormatter(logging.Formatter):
    """Formats records as '[LABEL] message' with the traceback appended."""

    LEVEL_LABELS = {
        logging.DEBUG: "[DEBUG]",
        logging.INFO: LOG_FORMAT_INFO,
        OK_LEVEL: LOG_FORMAT_OK,
        logging.WARNING: LOG_FORMAT_WARNING,
        logging.ERROR: LOG_FORMAT_ERROR,
        logging.CRITICAL: "[CRITICAL]",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, f"[{record.levelname}]")
        text = f"{label} {record.getMessage()}"
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text


class ExportLogger(logging.LoggerAdapter):
    """Adds ok() for the OK level."""

    def ok(self, msg, *args, **kwargs):
        self.log(OK_LEVEL, msg, *args, **kwargs)


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure the package logger once; later calls return it unchanged."""
    global _configured
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _configured:
        return logger

    logging.addLevelName(OK_LEVEL, "OK")
    logger.setLevel(level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    _configured = True
    return logger


def get_logger(name: str) -> ExportLogger:
    """Child logger of the package logger, e.g. get_logger('xlsx')."""
    setup_logging()
    return ExportLogger(logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}"), {})


def reset_logging() -> None:
    """Drop handlers so the next setup_logging() starts fresh. For tests."""
    global _configured
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    _configured = False
