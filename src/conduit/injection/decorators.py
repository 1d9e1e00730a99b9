# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Class decorators for registering services with a container.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from conduit.injection.container import Container, get_container
from conduit.injection.markers import inject_param
from conduit.metadata import MetadataKind, metadata

C = TypeVar("C", bound=type)


def injectable(
    singleton: bool | type | None = True,
    container: Container | None = None,
    params: Mapping[int, type | str] | None = None,
) -> Any:
    """Mark a class as injectable and register it with a container.

    Usable bare (``@injectable``) or called (``@injectable(singleton=False)``).

    Args:
        singleton: Cache one instance per container (default) or build a new
            one on every resolve
        container: Target container; the process-wide one by default
        params: Explicit targets for constructor parameters, by position
    """
    if isinstance(singleton, type):
        return injectable()(singleton)

    def decorator(cls: C) -> C:
        for index, target in (params or {}).items():
            inject_param(cls, index, target)
        (container or get_container()).register(cls, singleton=singleton)
        metadata.define(MetadataKind.INJECTABLE, {"singleton": singleton}, cls)
        return cls

    return decorator


def is_injectable(cls: Any) -> bool:
    """Whether ``cls`` was declared with ``@injectable``."""
    return metadata.has(MetadataKind.INJECTABLE, cls)



def bootstrap(container: Container | None = None) -> Any:
    """Resolve a class as soon as it is defined.

    The class is registered with the container's default lifecycle first
    when it has no definition yet. Stack it above ``@injectable`` to keep
    that decorator's lifecycle.
    """
    if isinstance(container, type):
        return bootstrap()(container)

    def decorator(cls: C) -> C:
        target = container or get_container()
        if not target.has(cls):
            target.register(cls)
        target.resolve(cls)
        return cls

    return decorator
