# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit

"""
Public API for the conduit logging system.

This module exports structured logging and its environment-driven settings.
"""

from __future__ import annotations

from conduit.logging.config import LoggingSettings
from conduit.logging.level import LogLevel
from conduit.logging.logger import (
    ConduitJsonEncoder,
    ConduitLogger,
    StructuredFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    "LogLevel",
    "ConduitLogger",
    "ConduitJsonEncoder",
    "StructuredFormatter",
    "LoggingSettings",
    "configure_logging",
    "get_logger",
]
