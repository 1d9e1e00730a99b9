# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Helpers that record method-level metadata at class-definition time.

Method decorators cannot see the class they are applied in, so they return a
``MethodDeclaration``. When the class body finishes, Python calls
``__set_name__`` on it; the declaration writes its metadata against
``InstanceSide(owner)`` and puts the plain function back on the class.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from conduit.metadata.store import InstanceSide, MetadataKind, metadata

DeclarationAction = Callable[[type, str], None]


class MethodDeclaration:
    """A function waiting for its owning class to be created."""

    def __init__(self, func: Callable[..., Any], actions: list[DeclarationAction]):
        self.func = func
        self.actions = actions
        functools.update_wrapper(self, func)

    def __set_name__(self, owner: type, name: str) -> None:
        setattr(owner, name, self.func)
        for action in self.actions:
            action(owner, name)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.func(*args, **kwargs)


def declare(target: Any, action: DeclarationAction) -> MethodDeclaration:
    """Attach ``action`` to a method, stacking with earlier declarations."""
    if isinstance(target, MethodDeclaration):
        target.actions.append(action)
        return target
    if not callable(target):
        raise TypeError(f"Expected a function to decorate, got {target!r}")
    return MethodDeclaration(target, [action])


def record_method(kind: MetadataKind, owner: type, name: str, value: Any) -> None:
    """Store ``value`` for method ``name`` in the owner's ``{method: value}`` map."""
    side = InstanceSide(owner)
    methods = dict(metadata.get(kind, side) or {})
    methods[name] = value
    metadata.define(kind, methods, side)


def record_listing(kind: MetadataKind, target: Any, key: str, name: str) -> None:
    """Append ``name`` to the ``{key: [names]}`` map stored under ``target``."""
    listing = {k: list(v) for k, v in (metadata.get(kind, target) or {}).items()}
    names = listing.setdefault(key, [])
    if name not in names:
        names.append(name)
    metadata.define(kind, listing, target)


def instance_metadata(kind: MetadataKind, cls: type) -> dict[str, Any]:
    """Merge the instance-side map for ``kind`` across the MRO of ``cls``.

    Base classes are applied first so a subclass declaration wins. List values
    are concatenated without duplicates.
    """
    merged: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        record = metadata.get(kind, InstanceSide(klass))
        if not record:
            continue
        for key, value in record.items():
            if isinstance(value, list) and isinstance(merged.get(key), list):
                merged[key] = merged[key] + [v for v in value if v not in merged[key]]
            else:
                merged[key] = list(value) if isinstance(value, list) else value
    return merged
