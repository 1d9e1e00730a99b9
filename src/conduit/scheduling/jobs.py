# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Scheduled jobs armed for ``@cron`` methods of a built instance.
"""

from __future__ import annotations

import inspect
import threading
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any

from conduit.config.settings import DEFAULT_SCHEDULE_HORIZON_MINUTES
from conduit.logging import get_logger
from conduit.metadata import MetadataKind, instance_metadata
from conduit.scheduling.errors import ScheduledInvocationError, ScheduleError
from conduit.scheduling.schedules import CalendarSchedule, IntervalSchedule, Schedule
from conduit.scheduling.timers import Backend, TimerHandle, Timers, select_timers

logger = get_logger(__name__)

Clock = Callable[[], datetime]


class ScheduledJob:
    """Repeatedly invokes one bound method according to a schedule.

    Interval jobs re-arm before each invocation so the period stays fixed.
    Calendar jobs re-arm after the invocation finishes. An invocation that
    raises is logged and the schedule continues.
    """

    def __init__(
        self,
        name: str,
        method: Callable[[], Any],
        schedule: Schedule,
        timers: Timers,
        *,
        horizon_minutes: int = DEFAULT_SCHEDULE_HORIZON_MINUTES,
        clock: Clock = datetime.now,
    ) -> None:
        self.name = name
        self.method = method
        self.schedule = schedule
        self.timers = timers
        self.horizon_minutes = horizon_minutes
        self.clock = clock
        self.fire_count = 0
        self._active = False
        self._handle: TimerHandle | None = None
        self._lock = threading.RLock()

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        """Arm the first firing.

        Raises:
            ScheduleUnresolvableError: If a calendar schedule has no next match.
        """
        with self._lock:
            if self._active:
                return
            self._active = True
            try:
                self._arm()
            except ScheduleError:
                self._active = False
                raise
        logger.debug("Scheduled job armed", job=self.name, schedule=str(self.schedule))

    def stop(self) -> None:
        """Cancel the pending firing. Safe to call more than once."""
        with self._lock:
            if not self._active:
                return
            self._active = False
            handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()
        logger.debug("Scheduled job stopped", job=self.name)

    def _delay(self) -> float:
        if isinstance(self.schedule, IntervalSchedule):
            return self.schedule.seconds
        now = self.clock()
        upcoming = self.schedule.next_after(now, self.horizon_minutes)
        return (upcoming - now).total_seconds()

    def _arm(self) -> None:
        self._handle = self.timers.call_later(self._delay(), self._fire)

    def _rearm(self) -> bool:
        with self._lock:
            if not self._active:
                return False
            try:
                self._arm()
            except ScheduleError as e:
                self._active = False
                self._handle = None
                logger.error(
                    f"Stopping scheduled job {self.name}: {e.message}",
                    job=self.name,
                    code=e.code.code,
                )
                return False
        return True

    def _fire(self) -> Any:
        with self._lock:
            if not self._active:
                return None
            self.fire_count += 1

        if isinstance(self.schedule, IntervalSchedule):
            self._rearm()

        try:
            result = self.method()
        except Exception as e:
            self._report(e)
            result = None

        if inspect.isawaitable(result):
            return self._settle(result)

        if isinstance(self.schedule, CalendarSchedule):
            self._rearm()
        return None

    async def _settle(self, awaitable: Awaitable[Any]) -> None:
        try:
            await awaitable
        except Exception as e:
            self._report(e)
        if isinstance(self.schedule, CalendarSchedule):
            self._rearm()

    def _report(self, error: Exception) -> None:
        failure = ScheduledInvocationError(self.name, error)
        logger.error(
            failure.message,
            code=failure.code.code,
            job=self.name,
            exc_info=(type(error), error, error.__traceback__),
        )

    def __repr__(self) -> str:
        state = "active" if self._active else "stopped"
        return f"ScheduledJob({self.name!r}, {self.schedule}, {state})"


def arm_schedules(
    instance: Any,
    cls: type,
    *,
    backend: Backend = "auto",
    horizon_minutes: int = DEFAULT_SCHEDULE_HORIZON_MINUTES,
    clock: Clock = datetime.now,
) -> list[ScheduledJob]:
    """Start a job for every ``@cron`` method declared on ``cls``.

    Raises:
        ScheduleError: If a job cannot be armed. Jobs already started by this
            call are stopped first.
    """
    declared: dict[str, Schedule] = instance_metadata(MetadataKind.SCHEDULE, cls)
    if not declared:
        return []

    timers = select_timers(backend)
    jobs: list[ScheduledJob] = []
    try:
        for name, schedule in declared.items():
            method = getattr(instance, name, None)
            if not callable(method):
                continue
            job = ScheduledJob(
                f"{cls.__name__}.{name}",
                method,
                schedule,
                timers,
                horizon_minutes=horizon_minutes,
                clock=clock,
            )
            job.start()
            jobs.append(job)
    except ScheduleError:
        for job in jobs:
            job.stop()
        raise
    return jobs
