# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Log levels accepted by conduit settings, loggers and the event bus.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(str, Enum):
    """Canonical level names.

    ``coerce`` also takes the stdlib aliases (``WARN``, ``FATAL``) and level
    numbers, so ``CONDUIT_LISTENER_ERROR_LEVEL=30`` and ``=warn`` both mean
    ``WARNING``.
    """

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def number(self) -> int:
        return logging.getLevelNamesMapping()[self.value]

    @classmethod
    def coerce(cls, value: LogLevel | str | int) -> LogLevel:
        """Normalize a level name, alias or stdlib number.

        Numbers between two named levels round down, so ``25`` is ``INFO``.

        Raises:
            ValueError: For unknown names, booleans and numbers below ``DEBUG``
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            below = [level for level in cls if level.number <= value]
            if below:
                return max(below, key=lambda level: level.number)
        elif isinstance(value, str):
            name = value.strip().upper()
            if name.isdigit():
                return cls.coerce(int(name))
            number = logging.getLevelNamesMapping().get(name)
            if number is not None and number >= logging.DEBUG:
                return cls.coerce(number)
        raise ValueError(f"Invalid log level: {value!r}")
