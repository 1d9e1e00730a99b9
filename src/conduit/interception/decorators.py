# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Method decorators for telemetry and publish/subscribe.

The decorators only record metadata. Wrapping happens when the container
builds an instance of the class.

Example:
    ```python
    @injectable()
    class UserService:
        @publisher("user.created")
        def create_user(self, name: str) -> dict:
            ...

    @injectable()
    class AuditService:
        @subscriber("user.created")
        def on_user_created(self, event: InvocationEvent) -> None:
            ...
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from conduit.interception.options import Phase, PublisherOptions, TelemetryOptions
from conduit.metadata import (
    InstanceSide,
    MetadataKind,
    MethodDeclaration,
    declare,
    record_listing,
    record_method,
)

F = TypeVar("F", bound=Callable[..., Any])


def telemetry(
    func: F | None = None, *, logging: bool = False
) -> Any:
    """Emit a ``telemetry`` event on every call of the decorated method.

    Usable bare (``@telemetry``) or with options (``@telemetry(logging=True)``).
    """
    options = TelemetryOptions(logging=logging)

    def decorator(target: F) -> MethodDeclaration:
        return declare(
            target,
            lambda owner, name: record_method(
                MetadataKind.TELEMETRY, owner, name, options
            ),
        )

    if func is not None:
        return decorator(func)
    return decorator


def telemetry_listener(func: F | None = None) -> Any:
    """Subscribe the decorated method to the container's ``telemetry`` event."""

    def decorator(target: F) -> MethodDeclaration:
        return declare(
            target,
            lambda owner, name: record_method(
                MetadataKind.TELEMETRY_LISTENER, owner, name, True
            ),
        )

    if func is not None:
        return decorator(func)
    return decorator


def publisher(
    event: str | PublisherOptions | None = None,
    *,
    phase: Phase = "after",
    logging: bool = False,
) -> Callable[[F], MethodDeclaration]:
    """Publish ``event`` on the container whenever the decorated method runs.

    Args:
        event: Event name, or a complete ``PublisherOptions``
        phase: ``"before"``, ``"after"`` (default) or ``"both"``
        logging: Log one line per invocation
    """
    if isinstance(event, PublisherOptions):
        options = event
    else:
        options = PublisherOptions(event=event or "", phase=phase, logging=logging)

    def decorator(target: F) -> MethodDeclaration:
        return declare(
            target,
            lambda owner, name: record_method(
                MetadataKind.PUBLISHER, owner, name, options
            ),
        )

    return decorator


def subscriber(event: str) -> Callable[[F], MethodDeclaration]:
    """Subscribe the decorated method to ``event`` once an instance is built."""
    if not isinstance(event, str) or not event:
        raise ValueError("subscriber() requires a non-empty event name")

    def decorator(target: F) -> MethodDeclaration:
        return declare(
            target,
            lambda owner, name: record_listing(
                MetadataKind.SUBSCRIBER, InstanceSide(owner), event, name
            ),
        )

    return decorator
