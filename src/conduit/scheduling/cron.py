# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Five-field calendar expressions.

``minute hour day-of-month month day-of-week``; each field accepts ``*``,
``*/N``, ``A``, ``A-B``, ``A-B/N``, ``A/N`` and comma separated lists of
those. Day-of-week runs 0-6 with 0 as Sunday; 7 is accepted as Sunday too.
A time matches when all five fields match.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from conduit.config.settings import DEFAULT_SCHEDULE_HORIZON_MINUTES
from conduit.scheduling.errors import InvalidScheduleError, ScheduleUnresolvableError

# (name, lowest, highest)
_FIELDS: tuple[tuple[str, int, int], ...] = (
    ("minute", 0, 59),
    ("hour", 0, 23),
    ("day", 1, 31),
    ("month", 1, 12),
    ("weekday", 0, 7),
)


def _parse_int(text: str, expression: str, field: str) -> int:
    if not text.isdigit():
        raise InvalidScheduleError(
            f"Invalid value '{text}' in {field} field of '{expression}'",
            schedule=expression,
        )
    return int(text)


def parse_field(text: str, lo: int, hi: int, *, field: str = "field", expression: str = "") -> frozenset[int]:
    """Expand one field into the set of values it allows."""
    expression = expression or text
    values: set[int] = set()
    for part in text.split(","):
        if not part:
            raise InvalidScheduleError(
                f"Empty list item in {field} field of '{expression}'",
                schedule=expression,
            )
        base, _, step_text = part.partition("/")
        step = 1
        if step_text:
            step = _parse_int(step_text, expression, field)
            if step == 0:
                raise InvalidScheduleError(
                    f"Step must be positive in {field} field of '{expression}'",
                    schedule=expression,
                )

        if base == "*":
            start, end = lo, hi
        elif "-" in base:
            first, _, last = base.partition("-")
            start = _parse_int(first, expression, field)
            end = _parse_int(last, expression, field)
        else:
            start = _parse_int(base, expression, field)
            end = hi if step_text else start

        if start < lo or end > hi or start > end:
            raise InvalidScheduleError(
                f"Range {part} out of bounds {lo}-{hi} in {field} field of '{expression}'",
                schedule=expression,
            )
        values.update(range(start, end + 1, step))
    return frozenset(values)


@dataclass(frozen=True)
class CronExpression:
    """Parsed calendar expression: the allowed values of each field."""

    expression: str
    minutes: frozenset[int]
    hours: frozenset[int]
    days: frozenset[int]
    months: frozenset[int]
    weekdays: frozenset[int]

    @classmethod
    def parse(cls, expression: str) -> CronExpression:
        """Parse a five-field expression.

        Raises:
            InvalidScheduleError: If the expression is malformed.
        """
        if not isinstance(expression, str):
            raise InvalidScheduleError(
                f"Calendar expression must be a string, got {expression!r}",
                schedule=expression,
            )
        parts = expression.split()
        if len(parts) != len(_FIELDS):
            raise InvalidScheduleError(
                f"Calendar expression '{expression}' must have 5 fields, got {len(parts)}",
                schedule=expression,
            )
        fields = [
            parse_field(part, lo, hi, field=name, expression=expression)
            for part, (name, lo, hi) in zip(parts, _FIELDS)
        ]
        # 7 and 0 both mean Sunday
        weekdays = frozenset(0 if day == 7 else day for day in fields[4])
        return cls(expression, fields[0], fields[1], fields[2], fields[3], weekdays)

    def matches(self, moment: datetime) -> bool:
        return (
            moment.minute in self.minutes
            and moment.hour in self.hours
            and moment.day in self.days
            and moment.month in self.months
            and (moment.weekday() + 1) % 7 in self.weekdays
        )

    def next_after(
        self,
        now: datetime,
        horizon_minutes: int = DEFAULT_SCHEDULE_HORIZON_MINUTES,
    ) -> datetime:
        """Return the first matching minute strictly after ``now``.

        The search starts at ``now`` truncated to the next whole minute and
        walks forward, skipping whole months, days and hours that cannot match.

        Raises:
            ScheduleUnresolvableError: If nothing matches within ``horizon_minutes``.
        """
        candidate = now.replace(second=0, microsecond=0) + timedelta(minutes=1)
        limit = candidate + timedelta(minutes=horizon_minutes)

        while candidate < limit:
            if candidate.month not in self.months:
                year = candidate.year + candidate.month // 12
                month = candidate.month % 12 + 1
                candidate = candidate.replace(
                    year=year, month=month, day=1, hour=0, minute=0
                )
                continue
            if (
                candidate.day not in self.days
                or (candidate.weekday() + 1) % 7 not in self.weekdays
            ):
                candidate = candidate.replace(hour=0, minute=0) + timedelta(days=1)
                continue
            if candidate.hour not in self.hours:
                candidate = candidate.replace(minute=0) + timedelta(hours=1)
                continue
            if candidate.minute not in self.minutes:
                candidate += timedelta(minutes=1)
                continue
            return candidate

        raise ScheduleUnresolvableError(self.expression, horizon_minutes)

    def __str__(self) -> str:
        return self.expression
