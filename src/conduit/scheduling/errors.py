# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Error classes for scheduled method invocation.
"""

from __future__ import annotations

from typing import Any, Final

from conduit.errors.base import ConduitError, ErrorCategory, ErrorCode, ErrorSeverity

SCHEDULE: Final = ErrorCategory.get_or_create("SCHEDULE")
SCHEDULE_ERROR: Final = ErrorCode.get_or_create("SCHEDULE_ERROR", SCHEDULE)
SCHEDULE_INVALID: Final = ErrorCode.get_or_create("SCHEDULE_INVALID", SCHEDULE)
SCHEDULE_UNRESOLVABLE: Final = ErrorCode.get_or_create(
    "SCHEDULE_UNRESOLVABLE", SCHEDULE
)
SCHEDULE_INVOCATION: Final = ErrorCode.get_or_create("SCHEDULE_INVOCATION", SCHEDULE)
SCHEDULE_BACKEND: Final = ErrorCode.get_or_create("SCHEDULE_BACKEND", SCHEDULE)


class ScheduleError(ConduitError):
    """Base class for all scheduling errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = SCHEDULE_ERROR,
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


class InvalidScheduleError(ScheduleError, ValueError):
    """A schedule value or calendar expression could not be parsed."""

    def __init__(self, message: str, schedule: Any = None, **kwargs: Any) -> None:
        super().__init__(
            message, code=SCHEDULE_INVALID, schedule=schedule, **kwargs
        )


class ScheduleUnresolvableError(ScheduleError):
    """No time within the search horizon matches a calendar expression."""

    def __init__(self, expression: str, horizon_minutes: int, **kwargs: Any) -> None:
        super().__init__(
            f"No time matching '{expression}' within {horizon_minutes} minutes",
            code=SCHEDULE_UNRESOLVABLE,
            expression=expression,
            horizon_minutes=horizon_minutes,
            **kwargs,
        )


class ScheduledInvocationError(ScheduleError):
    """A scheduled method raised. Logged per firing; the schedule keeps running."""

    def __init__(self, job: str, error: BaseException, **kwargs: Any) -> None:
        super().__init__(
            f"Scheduled invocation of {job} failed: {error}",
            code=SCHEDULE_INVOCATION,
            job=job,
            error=repr(error),
            **kwargs,
        )


class SchedulerBackendError(ScheduleError):
    """The requested timer backend cannot be used in the current context."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, code=SCHEDULE_BACKEND, **kwargs)
