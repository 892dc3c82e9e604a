import logging
from io import StringIO

import pytest
import structlog
from structlog.testing import capture_logs

from geminikit.geminikit_logging import (
    LogFormat,
    LogLevel,
    setup_logging,
)


def test_setup_logging():
    setup_logging(log_level=LogLevel.DEBUG, log_format=LogFormat.JSON)

    with capture_logs() as cap_logs:
        logger = structlog.get_logger("geminikit")
        logger.debug("Debug message")

    # cap_logs is a list with the captured log entries
    log_entry = cap_logs[0]

    assert log_entry["log_level"] == "debug"
    assert log_entry["event"] == "Debug message"


def test_logging_stream_output():
    setup_logging(log_level=LogLevel.DEBUG, log_format=LogFormat.TEXT)
    logger = logging.getLogger("geminikit")
    log_output = StringIO()
    handler = logging.StreamHandler(log_output)
    logger.addHandler(handler)

    try:
        logger.debug("Debug message")
    finally:
        logger.removeHandler(handler)

    log_output.seek(0)
    formatted_log = log_output.getvalue().strip()
    assert "Debug message" in formatted_log


def test_logging_level_filters():
    setup_logging(log_level=LogLevel.ERROR, log_format=LogFormat.TEXT)
    logger = logging.getLogger("geminikit")

    assert not logger.isEnabledFor(logging.INFO)
    assert logger.isEnabledFor(logging.ERROR)


def test_external_logger_configuration():
    # Test enabling httpx logging
    setup_logging(
        log_level=LogLevel.DEBUG,
        log_format=LogFormat.TEXT,
        external_loggers={"httpx": True},
    )
    httpx_logger = logging.getLogger("httpx")
    assert not httpx_logger.disabled
    assert httpx_logger.level == logging.DEBUG

    # Test disabling httpx logging
    setup_logging(
        log_level=LogLevel.DEBUG,
        log_format=LogFormat.TEXT,
        external_loggers={"httpx": False},
    )
    httpx_logger = logging.getLogger("httpx")
    assert httpx_logger.disabled


def test_external_loggers_disabled_by_default():
    setup_logging()
    assert logging.getLogger("httpcore").disabled
    assert logging.getLogger("httpx").disabled


@pytest.mark.parametrize("value,expected", [("debug", LogLevel.DEBUG), ("Error", LogLevel.ERROR)])
def test_log_level_case_insensitive(value, expected):
    assert LogLevel(value) == expected


def test_log_level_invalid():
    with pytest.raises(ValueError, match="Invalid log level"):
        LogLevel("verbose")


def test_log_format_invalid():
    with pytest.raises(ValueError, match="Invalid log format"):
        LogFormat("xml")
