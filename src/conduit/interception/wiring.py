# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Installs interception wrappers and subscriptions on a freshly built instance.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from conduit.events.bus import EventBus
from conduit.events.payloads import LifecycleEvent
from conduit.interception.errors import InterceptionError
from conduit.interception.wrappers import wrap_publisher, wrap_telemetry
from conduit.metadata import MetadataKind, instance_metadata

Unsubscribe = Callable[[], None]


def _method(instance: Any, name: str) -> Callable[..., Any] | None:
    method = getattr(instance, name, None)
    return method if callable(method) else None


def _install(instance: Any, cls: type, name: str, wrapper: Callable[..., Any]) -> None:
    try:
        setattr(instance, name, wrapper)
    except AttributeError as e:
        raise InterceptionError(cls, name, e) from e


def apply_telemetry(instance: Any, cls: type, bus: EventBus) -> list[Unsubscribe]:
    """Subscribe telemetry listeners and wrap ``@telemetry`` methods.

    Returns:
        Handles removing the subscriptions made for ``instance``.
    """
    unsubscribers: list[Unsubscribe] = []

    for name in instance_metadata(MetadataKind.TELEMETRY_LISTENER, cls):
        method = _method(instance, name)
        if method is not None:
            unsubscribers.append(bus.on(LifecycleEvent.TELEMETRY, method))

    try:
        for name, options in instance_metadata(MetadataKind.TELEMETRY, cls).items():
            method = _method(instance, name)
            if method is None:
                continue
            _install(
                instance,
                cls,
                name,
                wrap_telemetry(
                    method,
                    class_name=cls.__name__,
                    method_name=name,
                    emit=bus.emit,
                    options=options,
                ),
            )
    except InterceptionError:
        for unsubscribe in unsubscribers:
            unsubscribe()
        raise

    return unsubscribers


def apply_publish_subscribe(
    instance: Any, cls: type, bus: EventBus
) -> list[Unsubscribe]:
    """Wrap ``@publisher`` methods and subscribe ``@subscriber`` methods.

    Publishers wrap whatever is currently bound on the instance, so a method
    that also carries ``@telemetry`` emits both events.
    """
    for name, options in instance_metadata(MetadataKind.PUBLISHER, cls).items():
        method = _method(instance, name)
        if method is None:
            continue
        _install(
            instance,
            cls,
            name,
            wrap_publisher(
                method,
                class_name=cls.__name__,
                method_name=name,
                emit=bus.emit,
                options=options,
            ),
        )

    unsubscribers: list[Unsubscribe] = []
    for event, names in instance_metadata(MetadataKind.SUBSCRIBER, cls).items():
        for name in names:
            method = _method(instance, name)
            if method is not None:
                unsubscribers.append(bus.on(event, method))
    return unsubscribers
