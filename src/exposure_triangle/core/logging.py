"""
Logging for the exposure engine.

All loggers live under the ``exposure_triangle`` namespace. Console output is
plain, ANSI-coloured on a terminal, or JSON; file output is always JSON so
solve traces can be grepped and parsed later.

Usage:
    from exposure_triangle.core.logging import LogContext, get_logger, setup_logging

    setup_logging(level="DEBUG", json_format=True)
    logger = get_logger(__name__)

    with LogContext(operation="solve_iso", granularity="third"):
        logger.warning("ISO beyond camera limits", extra={"axis": "iso"})
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

PACKAGE_LOGGER = "exposure_triangle"

# Record attributes copied into JSON output when a caller passes them via extra=
STRUCTURED_FIELDS = ("operation", "axis", "granularity", "duration_seconds", "error_type")

PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
COLORED_FORMAT = "%(asctime)s | %(levelname)s | %(name)s:%(lineno)d | %(message)s"

_log_context: ContextVar[dict[str, Any]] = ContextVar("exposure_log_context", default={})


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON object.

    The payload carries the record basics, the active LogContext under
    ``context``, any STRUCTURED_FIELDS set on the record, and the formatted
    traceback when there is one.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        context = _log_context.get()
        if context:
            payload["context"] = dict(context)

        payload.update(
            {name: getattr(record, name) for name in STRUCTURED_FIELDS if hasattr(record, name)}
        )

        if record.exc_info:
            exc_type = record.exc_info[0]
            payload["exception_type"] = exc_type.__name__ if exc_type else None
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class ColoredFormatter(logging.Formatter):
    """Console formatter that colours the level name."""

    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Format a copy; the record is shared with every other handler
        tinted = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelno, "")
        tinted.levelname = f"{color}{record.levelname:8}{self.RESET}"
        return super().format(tinted)


def _console_handler(json_format: bool, colored: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if json_format:
        handler.setFormatter(JSONFormatter())
    elif colored and sys.stdout.isatty():
        handler.setFormatter(ColoredFormatter(COLORED_FORMAT, datefmt="%H:%M:%S"))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def _file_handler(log_file: str | Path) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(JSONFormatter())
    return handler


_configured = False


def setup_logging(
    level: str | None = None,
    log_file: str | Path | None = None,
    json_format: bool | None = None,
    colored: bool = True,
) -> logging.Logger:
    """Configure the package logger, replacing any handlers set earlier.

    Args:
        level: Level name; defaults to ``Settings.log_level``
        log_file: Also write JSON records to this file
        json_format: JSON console output; defaults to ``Settings.log_json``
        colored: Colour the console level names when stdout is a terminal

    Returns:
        The package logger
    """
    global _configured

    # Deferred: config imports core, which imports this module
    from exposure_triangle.config import get_settings

    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    if json_format is None:
        json_format = settings.log_json

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, level_name))
    package_logger.handlers.clear()
    package_logger.addHandler(_console_handler(json_format, colored))
    if log_file:
        package_logger.addHandler(_file_handler(log_file))

    _configured = True
    package_logger.debug(f"Logging configured at {level_name}", extra={"operation": "setup_logging"})
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the package namespace, configuring logging on first use."""
    if not _configured:
        setup_logging()
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


class LogContext:
    """Attach key/value context to every record logged inside the block.

    Contexts nest; inner values extend and override outer ones and are
    dropped again on exit.

    Example:
        with LogContext(operation="solve_shutter_speed"):
            with LogContext(granularity="half"):
                logger.debug("Snapping")  # context has both keys
    """

    def __init__(self, **context: Any):
        self.context = context
        self._token = None

    def __enter__(self) -> "LogContext":
        self._token = _log_context.set({**_log_context.get(), **self.context})
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None


def current_context() -> dict[str, Any]:
    """Copy of the context active in the calling scope."""
    return dict(_log_context.get())
