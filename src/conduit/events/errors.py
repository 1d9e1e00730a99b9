# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Event bus-specific error classes.
"""

from __future__ import annotations

from typing import Any, Final

from conduit.errors.base import ConduitError, ErrorCategory, ErrorCode, ErrorSeverity

EVENT_BUS: Final = ErrorCategory.get_or_create("EVENT_BUS")
EVENT_BUS_ERROR: Final = ErrorCode.get_or_create("EVENT_BUS_ERROR", EVENT_BUS)
EVENT_LISTENER: Final = ErrorCode.get_or_create("EVENT_LISTENER", EVENT_BUS)


class EventBusError(ConduitError):
    """Base class for all event bus-related errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = EVENT_BUS_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            code=code,
            severity=severity,
            context=context,
            **kwargs,
        )


class EventListenerError(EventBusError):
    """A listener raised while handling an event. Logged, never raised."""

    def __init__(
        self,
        event: str,
        listener: Any,
        error: BaseException,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Listener for '{event}' raised: {error}",
            code=EVENT_LISTENER,
            event=event,
            listener=getattr(listener, "__qualname__", repr(listener)),
            error=repr(error),
            **kwargs,
        )
