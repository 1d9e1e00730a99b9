# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Error classes for method interception.
"""

from __future__ import annotations

from typing import Any, Final

from conduit.errors.base import ConduitError, ErrorCategory, ErrorCode

INTERCEPTION: Final = ErrorCategory.get_or_create("INTERCEPTION")
INTERCEPTION_WRAP: Final = ErrorCode.get_or_create("INTERCEPTION_WRAP", INTERCEPTION)


class InterceptionError(ConduitError, TypeError):
    """An intercepted method could not be replaced on its instance.

    Raised for classes whose instances reject attribute assignment, such as
    classes declaring ``__slots__`` without ``__dict__``.
    """

    def __init__(self, cls: type, method: str, error: Exception, **kwargs: Any) -> None:
        super().__init__(
            f"Cannot intercept {cls.__name__}.{method}: {error}",
            code=INTERCEPTION_WRAP,
            service=cls.__name__,
            method=method,
            **kwargs,
        )
