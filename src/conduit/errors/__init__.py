# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit

"""
Error handling for conduit.
"""

from __future__ import annotations

from conduit.errors.base import (
    INTERNAL,
    INTERNAL_ERROR,
    ConduitError,
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
)
from conduit.errors.registry import ErrorRegistry, registry

__all__ = [
    # Error categories
    "ErrorCode",
    "ErrorCategory",
    "ErrorSeverity",
    "INTERNAL",
    "INTERNAL_ERROR",
    # Base errors
    "ConduitError",
    # Registry
    "ErrorRegistry",
    "registry",
]
