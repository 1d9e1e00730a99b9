# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Service definitions stored by the container.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, Final

Token = type | str
Producer = type | Callable[[], Any]


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Marks a singleton that has not been built yet; a factory may return None.
UNSET: Final = _Unset()


@dataclass(slots=True)
class ServiceDefinition:
    """How to produce a service and, for singletons, the cached instance."""

    producer: Producer
    singleton: bool = True
    instance: Any = UNSET

    @property
    def is_factory(self) -> bool:
        return not inspect.isclass(self.producer)

    @property
    def has_instance(self) -> bool:
        return self.singleton and self.instance is not UNSET

    def clone(self, carry_instance: bool = False) -> ServiceDefinition:
        return replace(self, instance=self.instance if carry_instance else UNSET)

    def __repr__(self) -> str:
        name = getattr(self.producer, "__name__", repr(self.producer))
        lifecycle = "singleton" if self.singleton else "transient"
        return f"ServiceDefinition({name}, {lifecycle})"
