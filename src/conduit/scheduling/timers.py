# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Timer backends for scheduled jobs.

``AsyncioTimers`` arms callbacks on an event loop; ``ThreadTimers`` uses daemon
``threading.Timer`` objects so schedules also run in plain synchronous
programs.
"""

from __future__ import annotations

import asyncio
import inspect
import threading
from collections.abc import Callable
from typing import Any, Literal, Protocol, runtime_checkable

from conduit.scheduling.errors import SchedulerBackendError

Backend = Literal["auto", "asyncio", "thread"]


@runtime_checkable
class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Timers(Protocol):
    """Arms a one-shot callback ``delay`` seconds from now."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class AsyncioTimers:
    """Timers backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self.loop = loop or asyncio.get_running_loop()
        self._tasks: set[asyncio.Task[Any]] = set()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        return self.loop.call_later(max(delay, 0), self._run, callback)

    def _run(self, callback: Callable[[], Any]) -> None:
        result = callback()
        if inspect.iscoroutine(result):
            task = self.loop.create_task(result)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)


class ThreadTimers:
    """Timers backed by daemon ``threading.Timer`` threads."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        timer = threading.Timer(max(delay, 0), self._run, args=(callback,))
        timer.daemon = True
        timer.start()
        return timer

    @staticmethod
    def _run(callback: Callable[[], Any]) -> None:
        result = callback()
        if inspect.iscoroutine(result):
            asyncio.run(result)


def select_timers(backend: Backend = "auto") -> AsyncioTimers | ThreadTimers:
    """Pick a timer implementation.

    ``auto`` uses the running event loop when there is one and threads
    otherwise.

    Raises:
        SchedulerBackendError: If ``asyncio`` is requested outside a running loop.
    """
    try:
        loop: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if backend == "thread":
        return ThreadTimers()
    if backend == "asyncio":
        if loop is None:
            raise SchedulerBackendError(
                "The asyncio scheduler backend requires a running event loop",
                backend=backend,
            )
        return AsyncioTimers(loop)
    if backend == "auto":
        return AsyncioTimers(loop) if loop is not None else ThreadTimers()
    raise SchedulerBackendError(f"Unknown scheduler backend '{backend}'", backend=backend)
