# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Logger implementation for conduit.

This module provides the default logger implementation based on Python's
standard logging module, enhanced with structured logging capabilities.
"""

from __future__ import annotations

import datetime
import enum
import json
import logging
import sys
import threading
import uuid
from logging import StreamHandler
from typing import Any

from conduit.logging.config import LoggingSettings
from conduit.logging.level import LogLevel

ROOT_LOGGER_NAME = "conduit"
CONTEXT_ATTR = "conduit_context"

_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime"}

_configure_lock = threading.Lock()
_handler: logging.Handler | None = None


class StructuredFormatter(logging.Formatter):
    """Formatter that supports structured logging with context data."""

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
        include_level: bool = True,
    ) -> None:
        """Initialize a structured formatter.

        Args:
            json_format: Whether to format logs as JSON
            include_timestamp: Whether to include timestamps in logs
            include_level: Whether to include log level in logs
        """
        self.json_format = json_format
        self.include_timestamp = include_timestamp
        self.include_level = include_level

        fmt = "%(message)s"
        if include_timestamp:
            fmt = "%(asctime)s " + fmt
        if include_level and not json_format:
            fmt = fmt + " [%(levelname)s]"

        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with structured data.

        Args:
            record: The log record to format

        Returns:
            Formatted log string
        """
        extra: dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key != CONTEXT_ATTR:
                extra[key] = value
        context = getattr(record, CONTEXT_ATTR, None)
        if isinstance(context, dict):
            extra.update(context)

        if self.json_format:
            return self._format_json(record, extra)
        message = super().format(record)
        return self._format_text(message, extra)

    def _format_json(self, record: logging.LogRecord, extra: dict[str, Any]) -> str:
        log_data: dict[str, Any] = {
            "message": record.getMessage(),
            "logger": record.name,
            **extra,
        }
        if self.include_level:
            log_data["level"] = record.levelname
        if self.include_timestamp:
            log_data["timestamp"] = self.formatTime(record, self.datefmt)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, cls=ConduitJsonEncoder)

    def _format_text(self, message: str, extra: dict[str, Any]) -> str:
        if not extra:
            return message
        ctx_str = " ".join(f"{k}={self._format_value(v)}" for k, v in extra.items())
        return f"{message} {ctx_str}"

    def _format_value(self, value: Any) -> str:
        """Format a value for text output."""
        if isinstance(value, str):
            if " " in value:
                return f'"{value}"'
            return value
        if isinstance(value, datetime.datetime | datetime.date):
            return value.isoformat()
        if isinstance(value, uuid.UUID):
            return str(value)
        if isinstance(value, enum.Enum):
            return value.name
        if isinstance(value, BaseException):
            return repr(str(value))
        if isinstance(value, dict | list):
            try:
                return json.dumps(value, cls=ConduitJsonEncoder)
            except (TypeError, ValueError):
                return str(value)
        return str(value)


class ConduitJsonEncoder(json.JSONEncoder):
    """JSON encoder that handles special types for logging.

    Unserializable objects are converted to strings rather than failing the
    log call.
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (datetime.datetime, datetime.date)):
            return obj.isoformat()
        if isinstance(obj, uuid.UUID):
            return str(obj)
        if isinstance(obj, enum.Enum):
            return obj.value
        if isinstance(obj, BaseException):
            return str(obj)
        if isinstance(obj, type):
            return obj.__qualname__
        if hasattr(obj, "model_dump"):
            return obj.model_dump(mode="json")
        return str(obj)


class ConduitLogger:
    """Structured logger adapter used throughout conduit.

    Keyword arguments passed to the logging methods are attached to the
    record as structured context and rendered by ``StructuredFormatter``.
    """

    def __init__(
        self, logger: logging.Logger, bound_context: dict[str, Any] | None = None
    ) -> None:
        self._logger = logger
        self._bound_context: dict[str, Any] = dict(bound_context or {})

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def stdlib_logger(self) -> logging.Logger:
        return self._logger

    def _log(
        self, level: int, message: str, exc_info: Any = None, **kwargs: Any
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        context = {**self._bound_context, **kwargs}
        self._logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={CONTEXT_ATTR: context},
            stacklevel=3,
        )

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log an error message with the active exception's traceback."""
        self._log(logging.ERROR, message, exc_info=True, **kwargs)

    def log(self, level: LogLevel | str | int, message: str, **kwargs: Any) -> None:
        """Log at an explicit level."""
        if not isinstance(level, int):
            level = LogLevel.coerce(level).number
        self._log(level, message, **kwargs)

    def set_level(self, level: LogLevel | str | int) -> None:
        self._logger.setLevel(LogLevel.coerce(level).number)

    def bind(self, **kwargs: Any) -> ConduitLogger:
        """Create a new logger with bound context values.

        Args:
            **kwargs: Context values to bind

        Returns:
            New logger instance with bound context
        """
        return ConduitLogger(self._logger, {**self._bound_context, **kwargs})


def configure_logging(
    settings: LoggingSettings | None = None, *, force: bool = False
) -> None:
    """Install the conduit handler on the ``conduit`` root logger.

    Runs once per process unless ``force`` is given, in which case the
    previous handler is replaced.

    Args:
        settings: Logging settings (loaded from the environment if None)
        force: Reconfigure even if logging was already configured
    """
    global _handler

    with _configure_lock:
        if _handler is not None and not force:
            return

        settings = settings or LoggingSettings.load()
        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.setLevel(LogLevel.coerce(settings.level).number)
        root.propagate = settings.propagate

        if _handler is not None:
            root.removeHandler(_handler)
            _handler = None

        handler: logging.Handler
        if settings.console_enabled:
            handler = StreamHandler(sys.stdout)
        else:
            handler = logging.NullHandler()
        handler.setFormatter(
            StructuredFormatter(
                json_format=settings.json_format,
                include_timestamp=settings.include_timestamp,
                include_level=settings.include_level,
            )
        )
        handler.setLevel(logging.NOTSET)
        root.addHandler(handler)
        _handler = handler


def get_logger(name: str, level: LogLevel | None = None) -> ConduitLogger:
    """Get a logger for the specified name.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override

    Returns:
        Configured logger instance
    """
    configure_logging()
    logger = ConduitLogger(logging.getLogger(name))
    if level is not None:
        logger.set_level(level)
    return logger
