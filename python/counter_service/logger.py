"""Centralized logger configuration for the counter service.

Every module logs through :func:`get_logger` so that application and Uvicorn
output share one timestamped format on stdout.
"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Track if root logger has been configured
_root_logger_configured = False


class _CounterFormatter(logging.Formatter):
    """Formatter that renames 'uvicorn.error' to 'uvicorn'.

    Uvicorn routes its ordinary startup chatter through 'uvicorn.error', which
    reads like a failure in the logs.
    """

    def format(self, record: logging.LogRecord) -> str:
        if record.name == "uvicorn.error":
            record.name = "uvicorn"
        return super().format(record)


def _build_handler(level: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(_CounterFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def _resolve_level(level: Optional[str]) -> str:
    if level is None:
        level = os.environ.get("COUNTER_LOG_LEVEL", "INFO")
    return level.upper()


def configure_uvicorn_logging(level: Optional[str] = None) -> None:
    """Point Uvicorn loggers at the standard handler.

    Must run after Uvicorn has set up its own loggers (i.e. during app
    startup), otherwise Uvicorn overwrites the configuration.
    """
    level = _resolve_level(level)
    handler = _build_handler(level)

    for logger_name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(logger_name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.addHandler(handler)
        uvicorn_logger.setLevel(level)
        uvicorn_logger.propagate = False


def configure_root_logger(level: Optional[str] = None) -> None:
    """Configure the root logger with standard formatting.

    This should be called once at application startup. Subsequent calls
    are idempotent.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, reads from COUNTER_LOG_LEVEL env var or defaults to INFO.
    """
    global _root_logger_configured

    if _root_logger_configured:
        return

    level = _resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_build_handler(level))

    configure_uvicorn_logging(level)

    _root_logger_configured = True


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a configured logger with standardized formatting.

    The root logger is configured automatically on first call.

    Args:
        name: Logger name (typically __name__ of the calling module)
        level: Optional log level override. If None, uses root logger level.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Counter incremented")
        2024-01-15 10:30:45.123 | INFO     | counter_service.app | Counter incremented
    """
    if not _root_logger_configured:
        configure_root_logger(level)

    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level.upper())

    return logger
