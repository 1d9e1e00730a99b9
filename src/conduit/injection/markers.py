# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Explicit injection targets for constructor parameters and properties.

Three ways of declaring the same thing:

```python
class Mailer:
    # property, declared in the class body
    transport = Inject("smtp")

    # constructor parameter, declared in the signature
    def __init__(self, logger: Annotated[Logger, Inject("audit-logger")]): ...

# builders, applied from outside the class
inject_property(Mailer, "templates", TemplateStore)
inject_param(Mailer, 0, "audit-logger")
```
"""

from __future__ import annotations

from typing import Annotated, Any, get_args, get_origin

from conduit.metadata import InstanceSide, MetadataKind, metadata

PARAM_PREFIX = "param_"


def _record(target: Any, key: str, token: Any) -> None:
    targets = dict(metadata.get(MetadataKind.INJECT, target) or {})
    targets[key] = token
    metadata.define(MetadataKind.INJECT, targets, target)


class Inject:
    """Marks a constructor parameter or a class attribute for injection."""

    __slots__ = ("target",)

    def __init__(self, target: type | str) -> None:
        if not (isinstance(target, type) or (isinstance(target, str) and target)):
            raise TypeError(f"Inject() target must be a class or a name, got {target!r}")
        self.target = target

    def __set_name__(self, owner: type, name: str) -> None:
        _record(InstanceSide(owner), name, self.target)
        # the instance attribute is set when the container builds the object
        delattr(owner, name)

    def __repr__(self) -> str:
        return f"Inject({getattr(self.target, '__name__', self.target)!r})"


def inject_property(cls: type, name: str, target: type | str) -> type:
    """Inject ``target`` into attribute ``name`` of every instance of ``cls``."""
    if name.startswith(PARAM_PREFIX):
        raise ValueError(f"Property names may not start with '{PARAM_PREFIX}'")
    _record(cls, name, target)
    return cls


def inject_param(cls: type, index: int, target: type | str) -> type:
    """Resolve constructor parameter ``index`` of ``cls`` from ``target``.

    ``index`` 0 is the first parameter after ``self``.
    """
    if not isinstance(index, int) or isinstance(index, bool) or index < 0:
        raise ValueError(f"Parameter index must be a non-negative int, got {index!r}")
    _record(cls, f"{PARAM_PREFIX}{index}", target)
    return cls


def param_target(cls: type, index: int) -> Any:
    """Explicit target declared for constructor parameter ``index`` of ``cls``."""
    targets = metadata.get(MetadataKind.INJECT, cls) or {}
    return targets.get(f"{PARAM_PREFIX}{index}")


def property_targets(cls: type) -> dict[str, Any]:
    """Merged property targets of ``cls``, instance-side declarations winning."""
    merged: dict[str, Any] = {}
    for side in (lambda k: k, InstanceSide):
        for klass in reversed(cls.__mro__):
            targets = metadata.get(MetadataKind.INJECT, side(klass)) or {}
            for key, token in targets.items():
                if not key.startswith(PARAM_PREFIX):
                    merged[key] = token
    return merged


def split_annotation(annotation: Any) -> tuple[Any, Inject | None]:
    """Return the bare annotation and the ``Inject`` marker inside ``Annotated``."""
    if get_origin(annotation) is Annotated:
        base, *extras = get_args(annotation)
        marker = next((e for e in extras if isinstance(e, Inject)), None)
        return base, marker
    return annotation, None
