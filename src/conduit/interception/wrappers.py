# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Method wrappers that emit invocation events.

Each wrapper takes a callable and returns a callable with the same signature.
Return values, raised exceptions and sync/async behaviour of the wrapped
callable are passed through untouched.
"""

from __future__ import annotations

import functools
import inspect
import time
from collections.abc import Awaitable, Callable
from typing import Any

from conduit.events.payloads import InvocationEvent, LifecycleEvent
from conduit.interception.options import PublisherOptions, TelemetryOptions
from conduit.logging import get_logger

logger = get_logger(__name__)

Emit = Callable[[str, InvocationEvent], None]
BeforeHook = Callable[[tuple[Any, ...], dict[str, Any], float], None]
AfterHook = Callable[
    [tuple[Any, ...], dict[str, Any], float, Any, BaseException | None], None
]


def _intercept(
    func: Callable[..., Any], before: BeforeHook | None, after: AfterHook
) -> Callable[..., Any]:
    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.time()
            if before is not None:
                before(args, kwargs, start)
            try:
                result = await func(*args, **kwargs)
            except BaseException as e:
                after(args, kwargs, start, None, e)
                raise
            after(args, kwargs, start, result, None)
            return result

        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        start = time.time()
        if before is not None:
            before(args, kwargs, start)
        try:
            result = func(*args, **kwargs)
        except BaseException as e:
            after(args, kwargs, start, None, e)
            raise
        if inspect.isawaitable(result):
            return _settle(result, args, kwargs, start, after)
        after(args, kwargs, start, result, None)
        return result

    return wrapper


async def _settle(
    awaitable: Awaitable[Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    start: float,
    after: AfterHook,
) -> Any:
    try:
        result = await awaitable
    except BaseException as e:
        after(args, kwargs, start, None, e)
        raise
    after(args, kwargs, start, result, None)
    return result


def _log_invocation(
    prefix: str, target: str, event: InvocationEvent
) -> None:
    status = "SUCCESS" if event.error is None else f"ERROR: {event.error}"
    logger.info(
        f"[{prefix}] {event.class_name}.{event.method_name}{target} - "
        f"{status} ({round(event.duration_ms)}ms)"
    )


def wrap_telemetry(
    func: Callable[..., Any],
    *,
    class_name: str,
    method_name: str,
    emit: Emit,
    options: TelemetryOptions | None = None,
) -> Callable[..., Any]:
    """Wrap ``func`` so every call emits one ``telemetry`` event."""
    options = options or TelemetryOptions()
    event_name = LifecycleEvent.TELEMETRY.value

    def after(
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        start: float,
        result: Any,
        error: BaseException | None,
    ) -> None:
        payload = InvocationEvent(
            class_name=class_name,
            method_name=method_name,
            args=args,
            kwargs=kwargs,
            start_time=start,
            end_time=time.time(),
            result=result,
            error=error,
            event=event_name,
        )
        if options.logging:
            _log_invocation("Telemetry", "", payload)
        emit(event_name, payload)

    return _intercept(func, None, after)


def wrap_publisher(
    func: Callable[..., Any],
    *,
    class_name: str,
    method_name: str,
    emit: Emit,
    options: PublisherOptions,
) -> Callable[..., Any]:
    """Wrap ``func`` so calls publish ``options.event`` per ``options.phase``."""

    def before(
        args: tuple[Any, ...], kwargs: dict[str, Any], start: float
    ) -> None:
        emit(
            options.event,
            InvocationEvent(
                class_name=class_name,
                method_name=method_name,
                args=args,
                kwargs=kwargs,
                start_time=start,
                event=options.event,
                phase="before",
            ),
        )

    def after(
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        start: float,
        result: Any,
        error: BaseException | None,
    ) -> None:
        payload = InvocationEvent(
            class_name=class_name,
            method_name=method_name,
            args=args,
            kwargs=kwargs,
            start_time=start,
            end_time=time.time(),
            result=result,
            error=error,
            event=options.event,
        )
        if options.logging:
            _log_invocation("Publisher", f" -> '{options.event}'", payload)
        if options.emits_after:
            emit(options.event, payload)

    return _intercept(func, before if options.emits_before else None, after)
