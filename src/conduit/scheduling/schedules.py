# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Schedule value objects accepted by ``@cron``.

A number is an interval in milliseconds, a ``timedelta`` is an interval and
a string is a five-field calendar expression.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from conduit.scheduling.cron import CronExpression
from conduit.scheduling.errors import InvalidScheduleError


class IntervalSchedule(BaseModel):
    """Fire every ``interval_ms`` milliseconds, first one period after arming."""

    model_config = ConfigDict(frozen=True)

    interval_ms: float = Field(gt=0)

    @property
    def seconds(self) -> float:
        return self.interval_ms / 1000

    def __str__(self) -> str:
        return f"every {self.interval_ms:g}ms"


class CalendarSchedule(BaseModel):
    """Fire at each minute matching a calendar expression."""

    model_config = ConfigDict(frozen=True)

    expression: str
    _parsed: CronExpression = PrivateAttr()

    @field_validator("expression")
    @classmethod
    def validate_expression(cls, v: str) -> str:
        CronExpression.parse(v)
        return " ".join(v.split())

    def model_post_init(self, __context: Any) -> None:
        self._parsed = CronExpression.parse(self.expression)

    @property
    def cron(self) -> CronExpression:
        return self._parsed

    def next_after(self, now: datetime, horizon_minutes: int) -> datetime:
        return self._parsed.next_after(now, horizon_minutes)

    def __str__(self) -> str:
        return self.expression


Schedule = IntervalSchedule | CalendarSchedule


def parse_schedule(value: Any) -> Schedule:
    """Turn a ``@cron`` argument into a schedule.

    Raises:
        InvalidScheduleError: If ``value`` is neither a positive interval nor a
            valid calendar expression.
    """
    if isinstance(value, (IntervalSchedule, CalendarSchedule)):
        return value
    # bool is an int subclass but never a sensible interval
    if isinstance(value, bool):
        raise InvalidScheduleError(f"Invalid schedule {value!r}", schedule=value)
    if isinstance(value, (int, float)):
        if value <= 0:
            raise InvalidScheduleError(
                f"Interval must be positive, got {value!r}ms", schedule=value
            )
        return IntervalSchedule(interval_ms=value)
    if isinstance(value, timedelta):
        if value <= timedelta(0):
            raise InvalidScheduleError(
                f"Interval must be positive, got {value!r}", schedule=value
            )
        return IntervalSchedule(interval_ms=value.total_seconds() * 1000)
    if isinstance(value, str):
        return CalendarSchedule(expression=CronExpression.parse(value).expression)
    raise InvalidScheduleError(
        f"Schedule must be milliseconds, a timedelta or a calendar expression, got {value!r}",
        schedule=value,
    )
