# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Out-of-band metadata storage.

Decorators and builder functions record what a class needs (injection
targets, intercepted methods, schedules) here instead of on the class itself;
the container reads it back while wiring an instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable


class MetadataKind(str, Enum):
    """Kinds of metadata attached to classes."""

    INJECTABLE = "di:injectable"
    INJECT = "di:inject"
    TELEMETRY = "di:telemetry"
    TELEMETRY_LISTENER = "di:telemetry-listener"
    PUBLISHER = "di:publisher"
    SUBSCRIBER = "di:subscriber"
    SCHEDULE = "di:cron"


@dataclass(frozen=True, slots=True)
class InstanceSide:
    """Metadata target for what a class declares about its instances.

    Written by in-body declarations (``Inject`` attributes and method
    decorators); the class object itself is the static-side target.
    """

    owner: type

    def __repr__(self) -> str:
        return f"InstanceSide({self.owner.__qualname__})"


class MetadataStore:
    """Process-wide map of ``(target, kind) -> value``."""

    def __init__(self) -> None:
        self._records: dict[Hashable, dict[MetadataKind, Any]] = {}

    def define(self, kind: MetadataKind, value: Any, target: Hashable) -> None:
        self._records.setdefault(target, {})[kind] = value

    def get(self, kind: MetadataKind, target: Hashable, default: Any = None) -> Any:
        return self._records.get(target, {}).get(kind, default)

    def has(self, kind: MetadataKind, target: Hashable) -> bool:
        return kind in self._records.get(target, {})

    def delete(self, kind: MetadataKind, target: Hashable) -> None:
        record = self._records.get(target)
        if record is not None:
            record.pop(kind, None)
            if not record:
                del self._records[target]


metadata = MetadataStore()
