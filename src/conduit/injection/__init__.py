# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit

from conduit.injection.container import Container, container, get_container
from conduit.injection.decorators import bootstrap, injectable, is_injectable
from conduit.injection.errors import (
    CircularDependencyError,
    InjectionError,
    PropertyInjectionError,
    ServiceNotFoundError,
)
from conduit.injection.markers import Inject, inject_param, inject_property
from conduit.injection.registration import ServiceDefinition
from conduit.injection.resolution import ResolutionStack

__all__ = [
    "Container",
    "container",
    "get_container",
    "bootstrap",
    "injectable",
    "is_injectable",
    "Inject",
    "inject_param",
    "inject_property",
    "ServiceDefinition",
    "ResolutionStack",
    "InjectionError",
    "ServiceNotFoundError",
    "CircularDependencyError",
    "PropertyInjectionError",
]
