import logging
import sys
from enum import Enum
from typing import Any, Dict, List, Optional

import structlog


class LogLevel(str, Enum):
    """Valid log levels."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"

    @classmethod
    def _missing_(cls, value: Any) -> Optional["LogLevel"]:
        """Handle case-insensitive lookup of enum values."""
        if isinstance(value, str):
            value = value.upper()
            for member in cls:
                if member.value == value:
                    return member
        raise ValueError(
            f"Invalid log level: {value}. Valid levels are: {', '.join(level.value for level in cls)}"
        )


class LogFormat(str, Enum):
    """Valid log formats."""

    JSON = "JSON"
    TEXT = "TEXT"

    @classmethod
    def _missing_(cls, value: Any) -> Optional["LogFormat"]:
        """Handle case-insensitive lookup of enum values."""
        if isinstance(value, str):
            value = value.upper()
            for member in cls:
                if member.value == value:
                    return member
        raise ValueError(
            f"Invalid log format: {value}. Valid formats are: {', '.join(fmt.value for fmt in cls)}"
        )


# Third-party loggers we know about, and whether they log by default.
EXTERNAL_LOGGERS: Dict[str, bool] = {
    "httpx": False,
    "httpcore": False,
}


def setup_logging(
    log_level: Optional[LogLevel] = None,
    log_format: Optional[LogFormat] = None,
    external_loggers: Optional[Dict[str, bool]] = None,
) -> logging.Logger:
    """
    Configure the logging system.

    Args:
        log_level: The logging level to use. Defaults to ERROR.
        log_format: The log format to use. Defaults to TEXT.
        external_loggers: Overrides for third-party loggers, name -> enabled.

    Logs always go to stderr so that stdout only carries command output.
    """
    if log_level is None:
        log_level = LogLevel.ERROR
    if log_format is None:
        log_format = LogFormat.TEXT

    loggers = dict(EXTERNAL_LOGGERS)
    loggers.update(external_loggers or {})

    shared_processors: List = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%Y-%m-%dT%H:%M:%S.%03dZ", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level.value)

    for name, enabled in loggers.items():
        ext_logger = logging.getLogger(name)
        ext_logger.disabled = not enabled
        if enabled:
            ext_logger.setLevel(log_level.value)

    logger = structlog.get_logger("geminikit")
    logger.debug(
        "Logging initialized",
        log_level=log_level.value,
        log_format=log_format.value,
        external_loggers=loggers,
    )
    return logging.getLogger("geminikit")
