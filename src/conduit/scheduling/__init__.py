# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""Scheduled invocation of service methods."""

from conduit.scheduling.cron import CronExpression
from conduit.scheduling.decorators import cron
from conduit.scheduling.errors import (
    InvalidScheduleError,
    ScheduledInvocationError,
    ScheduleError,
    SchedulerBackendError,
    ScheduleUnresolvableError,
)
from conduit.scheduling.jobs import ScheduledJob, arm_schedules
from conduit.scheduling.schedules import (
    CalendarSchedule,
    IntervalSchedule,
    Schedule,
    parse_schedule,
)
from conduit.scheduling.timers import AsyncioTimers, ThreadTimers, select_timers

__all__ = [
    "cron",
    "CronExpression",
    "Schedule",
    "IntervalSchedule",
    "CalendarSchedule",
    "parse_schedule",
    "ScheduledJob",
    "arm_schedules",
    "AsyncioTimers",
    "ThreadTimers",
    "select_timers",
    "ScheduleError",
    "InvalidScheduleError",
    "ScheduleUnresolvableError",
    "ScheduledInvocationError",
    "SchedulerBackendError",
]
