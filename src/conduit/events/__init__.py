# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""Lifecycle event bus and payload models."""

from conduit.events.bus import EventBus, Listener, event_name
from conduit.events.errors import EventBusError, EventListenerError
from conduit.events.payloads import (
    ClearedEvent,
    ConstructedEvent,
    EventPayload,
    InvocationEvent,
    LifecycleEvent,
    RegisteredEvent,
    ResolvedEvent,
)

__all__ = [
    "EventBus",
    "Listener",
    "event_name",
    "EventBusError",
    "EventListenerError",
    "EventPayload",
    "LifecycleEvent",
    "RegisteredEvent",
    "ResolvedEvent",
    "ConstructedEvent",
    "ClearedEvent",
    "InvocationEvent",
]
