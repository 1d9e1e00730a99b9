# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
In-process event bus used by the container for lifecycle, telemetry and
user-defined publish/subscribe events.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from conduit.events.errors import EventListenerError
from conduit.events.payloads import LifecycleEvent
from conduit.logging import ConduitLogger, LogLevel, get_logger

Listener = Callable[[Any], Any]


def event_name(event: str | LifecycleEvent) -> str:
    if isinstance(event, LifecycleEvent):
        return event.value
    if not isinstance(event, str) or not event:
        raise ValueError(f"Event name must be a non-empty string, got {event!r}")
    return event


class EventBus:
    """Observer registry keyed by event name.

    Listeners run synchronously in registration order. A listener that raises
    is logged and skipped; the remaining listeners still run. Coroutine
    listeners are scheduled on the running loop, or run to completion when no
    loop is running.
    """

    def __init__(
        self,
        logger: ConduitLogger | None = None,
        error_level: LogLevel | str | int = LogLevel.ERROR,
    ) -> None:
        # dict keys double as an insertion-ordered set of listeners
        self._listeners: dict[str, dict[Listener, None]] = {}
        self._logger = logger or get_logger(__name__)
        self._error_level = LogLevel.coerce(error_level)
        self._tasks: set[asyncio.Task[Any]] = set()

    def on(self, event: str | LifecycleEvent, listener: Listener) -> Callable[[], None]:
        """Subscribe ``listener`` to ``event``.

        Returns:
            A callable that removes the subscription.
        """
        if not callable(listener):
            raise TypeError(f"Listener must be callable, got {listener!r}")
        name = event_name(event)
        self._listeners.setdefault(name, {})[listener] = None

        def unsubscribe() -> None:
            self.off(name, listener)

        return unsubscribe

    def off(self, event: str | LifecycleEvent, listener: Listener) -> None:
        """Remove a previously registered listener. Unknown listeners are ignored."""
        name = event_name(event)
        listeners = self._listeners.get(name)
        if listeners is None:
            return
        listeners.pop(listener, None)
        if not listeners:
            del self._listeners[name]

    def listeners(self, event: str | LifecycleEvent) -> list[Listener]:
        return list(self._listeners.get(event_name(event), {}))

    def listener_count(self, event: str | LifecycleEvent | None = None) -> int:
        if event is None:
            return sum(len(listeners) for listeners in self._listeners.values())
        return len(self._listeners.get(event_name(event), {}))

    def emit(self, event: str | LifecycleEvent, payload: Any) -> None:
        """Deliver ``payload`` to every listener of ``event``."""
        name = event_name(event)
        listeners = self._listeners.get(name)
        if not listeners:
            return

        # Snapshot so listeners may (un)subscribe while being notified.
        for listener in list(listeners):
            try:
                result = listener(payload)
                if inspect.isawaitable(result):
                    self._run_awaitable(name, listener, result)
            except Exception as e:
                self._report(name, listener, e)

    def _run_awaitable(
        self, name: str, listener: Listener, awaitable: Awaitable[Any]
    ) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is None:
            asyncio.run(_as_coroutine(awaitable))
            return

        task = loop.create_task(_as_coroutine(awaitable))
        self._tasks.add(task)

        def done(t: asyncio.Task[Any]) -> None:
            self._tasks.discard(t)
            if not t.cancelled() and t.exception() is not None:
                self._report(name, listener, t.exception())

        task.add_done_callback(done)

    def _report(self, name: str, listener: Listener, error: BaseException) -> None:
        failure = EventListenerError(name, listener, error)
        self._logger.log(
            self._error_level,
            failure.message,
            code=failure.code.code,
            event=name,
            exc_info=(type(error), error, error.__traceback__),
        )

    def clear(self) -> None:
        """Remove every listener."""
        self._listeners.clear()


async def _as_coroutine(awaitable: Awaitable[Any]) -> Any:
    return await awaitable
