# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
conduit: an in-process service container with lifecycle events, method
interception and scheduled invocation.

Example:
    ```python
    from conduit import injectable, get_container, publisher, subscriber

    @injectable()
    class Greeter:
        @publisher("greeted")
        def greet(self, name: str) -> str:
            return f"Hello {name}"

    greeter = get_container().resolve(Greeter)
    ```
"""

from conduit.config import ConduitSettings
from conduit.errors import ConduitError, ErrorCategory, ErrorCode, ErrorSeverity
from conduit.events import (
    ClearedEvent,
    ConstructedEvent,
    EventBus,
    EventListenerError,
    InvocationEvent,
    LifecycleEvent,
    RegisteredEvent,
    ResolvedEvent,
)
from conduit.injection import (
    CircularDependencyError,
    Container,
    Inject,
    InjectionError,
    PropertyInjectionError,
    ServiceNotFoundError,
    bootstrap,
    container,
    get_container,
    inject_param,
    inject_property,
    injectable,
    is_injectable,
)
from conduit.interception import (
    InterceptionError,
    PublisherOptions,
    TelemetryOptions,
    publisher,
    subscriber,
    telemetry,
    telemetry_listener,
)
from conduit.logging import LoggingSettings, LogLevel, configure_logging, get_logger
from conduit.metadata import InstanceSide, MetadataKind, metadata
from conduit.scheduling import (
    CronExpression,
    InvalidScheduleError,
    ScheduledInvocationError,
    ScheduledJob,
    ScheduleError,
    ScheduleUnresolvableError,
    cron,
)

__version__ = "0.1.0"

__all__ = [
    # Container
    "Container",
    "container",
    "get_container",
    "ConduitSettings",
    # Declarations
    "bootstrap",
    "injectable",
    "is_injectable",
    "Inject",
    "inject_property",
    "inject_param",
    "telemetry",
    "telemetry_listener",
    "publisher",
    "subscriber",
    "cron",
    "TelemetryOptions",
    "PublisherOptions",
    # Metadata
    "metadata",
    "MetadataKind",
    "InstanceSide",
    # Events
    "EventBus",
    "LifecycleEvent",
    "RegisteredEvent",
    "ResolvedEvent",
    "ConstructedEvent",
    "ClearedEvent",
    "InvocationEvent",
    # Scheduling
    "CronExpression",
    "ScheduledJob",
    # Errors
    "ConduitError",
    "ErrorCategory",
    "ErrorCode",
    "ErrorSeverity",
    "InjectionError",
    "ServiceNotFoundError",
    "CircularDependencyError",
    "PropertyInjectionError",
    "InterceptionError",
    "ScheduleError",
    "InvalidScheduleError",
    "ScheduleUnresolvableError",
    "ScheduledInvocationError",
    "EventListenerError",
    # Logging
    "LogLevel",
    "LoggingSettings",
    "configure_logging",
    "get_logger",
]
