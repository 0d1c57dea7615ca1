from __future__ import annotations

import logging
import sys

import pytest

from settings.log_config import LabeledFormatter, OK_LEVEL, get_logger, reset_logging, setup_logging


@pytest.fixture()
def fresh_logging():
    reset_logging()
    yield
    reset_logging()


def test_labels_levels(fresh_logging, capsys):
    setup_logging()
    logger = get_logger("test")
    logger.ok("Excel file saved")
    logger.info("listening")
    logger.error("boom")
    logger.debug("hidden")

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["[OK] Excel file saved", "[INFO] listening", "[ERROR] boom"]


def test_setup_is_idempotent(fresh_logging):
    first = setup_logging()
    second = setup_logging(logging.DEBUG)
    assert first is second
    assert len(first.handlers) == 1
    assert first.level == logging.INFO


def test_formatter_appends_traceback():
    try:
        raise ValueError("bad value")
    except ValueError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
    text = LabeledFormatter().format(record)
    assert text.startswith("[ERROR] failed\n")
    assert "ValueError: bad value" in text


def test_ok_level_sits_between_info_and_warning():
    assert logging.INFO < OK_LEVEL < logging.WARNING
