# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Payload models emitted on the container's event bus.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class LifecycleEvent(str, Enum):
    """Built-in event names emitted by the container."""

    REGISTERED = "registered"
    RESOLVED = "resolved"
    CONSTRUCTED = "constructed"
    CLEARED = "cleared"
    TELEMETRY = "telemetry"


class EventPayload(BaseModel):
    """Base for all payloads; immutable and able to carry arbitrary objects."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class RegisteredEvent(EventPayload):
    token: Any
    singleton: bool
    kind: Literal["class", "factory"]


class ResolvedEvent(EventPayload):
    token: Any
    instance: Any
    singleton: bool
    from_cache: bool


class ConstructedEvent(EventPayload):
    token: Any
    instance: Any
    overrides: dict[int | str, Any] = Field(default_factory=dict)


class ClearedEvent(EventPayload):
    count: int


class InvocationEvent(EventPayload):
    """One call of an intercepted method.

    ``result`` is only meaningful when ``error`` is None and the event was
    emitted after the call returned.
    """

    class_name: str
    method_name: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = Field(default_factory=dict)
    start_time: float
    end_time: float | None = None
    result: Any = None
    error: BaseException | None = None
    event: str = LifecycleEvent.TELEMETRY.value
    phase: Literal["before", "after"] = "after"

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000
