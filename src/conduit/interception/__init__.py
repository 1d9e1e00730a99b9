# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""Telemetry and publish/subscribe interception of service methods."""

from conduit.interception.decorators import (
    publisher,
    subscriber,
    telemetry,
    telemetry_listener,
)
from conduit.interception.errors import InterceptionError
from conduit.interception.options import Phase, PublisherOptions, TelemetryOptions
from conduit.interception.wiring import apply_publish_subscribe, apply_telemetry
from conduit.interception.wrappers import wrap_publisher, wrap_telemetry

__all__ = [
    "telemetry",
    "telemetry_listener",
    "publisher",
    "subscriber",
    "Phase",
    "TelemetryOptions",
    "PublisherOptions",
    "apply_telemetry",
    "apply_publish_subscribe",
    "wrap_telemetry",
    "wrap_publisher",
    "InterceptionError",
]
