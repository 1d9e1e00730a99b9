# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""The ``@cron`` method decorator."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from typing import Any

from conduit.metadata import MetadataKind, MethodDeclaration, declare, record_method
from conduit.scheduling.schedules import Schedule, parse_schedule


def cron(
    schedule: int | float | timedelta | str | Schedule,
) -> Callable[[Callable[..., Any]], MethodDeclaration]:
    """Run the decorated method on a schedule once its instance is built.

    Args:
        schedule: Interval in milliseconds, a ``timedelta``, or a five-field
            calendar expression such as ``"*/5 * * * *"``

    Raises:
        InvalidScheduleError: Immediately, if ``schedule`` is malformed.

    Example:
        ```python
        @injectable()
        class Reports:
            @cron("0 6 * * 1-5")
            def morning_digest(self) -> None:
                ...
        ```
    """
    parsed = parse_schedule(schedule)

    def decorator(target: Callable[..., Any]) -> MethodDeclaration:
        return declare(
            target,
            lambda owner, name: record_method(MetadataKind.SCHEDULE, owner, name, parsed),
        )

    return decorator
