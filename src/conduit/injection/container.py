# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit

"""
DI container implementation for conduit.

The container stores service definitions keyed by class or name, builds
instances on demand, resolves constructor and property dependencies, and
layers interception and scheduling onto every instance it builds.

Example:
    ```python
    container = Container()
    container.register(Database).register(UserRepository, singleton=False)
    repo = container.resolve(UserRepository)
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar, get_type_hints, overload

from conduit.config import ConduitSettings
from conduit.events import (
    ClearedEvent,
    ConstructedEvent,
    EventBus,
    LifecycleEvent,
    Listener,
    RegisteredEvent,
    ResolvedEvent,
)
from conduit.injection.errors import (
    PropertyInjectionError,
    ServiceNotFoundError,
    token_name,
)
from conduit.injection.markers import param_target, property_targets, split_annotation
from conduit.injection.registration import ServiceDefinition, Token
from conduit.injection.resolution import ResolutionStack
from conduit.interception import apply_publish_subscribe, apply_telemetry
from conduit.logging import LogLevel, get_logger
from conduit.scheduling import ScheduledJob, arm_schedules

T = TypeVar("T")

Unsubscribe = Callable[[], None]
Overrides = dict[int | str, Any]

logger = get_logger(__name__)

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _normalize(token: Any) -> Token:
    if inspect.isclass(token):
        return token
    if isinstance(token, str) and token:
        return token
    raise TypeError(f"Service token must be a class or a non-empty string, got {token!r}")


def _parameter_hints(init: Callable[..., Any]) -> dict[str, Any]:
    """Evaluated annotations of ``init``, one parameter at a time.

    A parameter whose string annotation cannot be evaluated is left out and
    keeps its raw annotation; the others are unaffected.
    """
    try:
        return get_type_hints(init, include_extras=True)
    except (NameError, TypeError, AttributeError):
        pass
    try:
        raw = inspect.get_annotations(init)
    except TypeError:
        return {}
    globalns = getattr(init, "__globals__", {})
    hints: dict[str, Any] = {}
    for name, annotation in raw.items():
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, globalns)  # noqa: S307
            except Exception:
                continue
        hints[name] = annotation
    return hints


class Container:
    """Registry that creates, caches and wires application services.

    Attributes:
        settings: Runtime settings; lifecycle default, schedule backend and horizon
        bus: Event bus carrying lifecycle, telemetry and published events
    """

    def __init__(
        self,
        settings: ConduitSettings | None = None,
        bus: EventBus | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings or ConduitSettings.load()
        self.bus = bus or EventBus(
            error_level=LogLevel.coerce(self.settings.listener_error_level)
        )
        self.clock = clock
        self._definitions: dict[Token, ServiceDefinition] = {}
        self._stack = ResolutionStack()
        self._jobs: list[ScheduledJob] = []
        self._subscriptions: list[Unsubscribe] = []

    # Registration

    def register(self, cls: type, *, singleton: bool | None = None) -> Container:
        """Register ``cls`` under the class itself and under its ``__name__``.

        A later registration for either key replaces the earlier one.

        Returns:
            The container, for chaining.
        """
        if not inspect.isclass(cls):
            raise TypeError(f"register() expects a class, got {cls!r}")
        if singleton is None:
            singleton = self.settings.default_singleton
        definition = ServiceDefinition(cls, singleton=singleton)
        self._definitions[cls] = definition
        self._definitions[cls.__name__] = definition
        logger.debug(
            f"Registered {cls.__name__}",
            token=cls.__name__,
            singleton=singleton,
        )
        self.bus.emit(
            LifecycleEvent.REGISTERED,
            RegisteredEvent(token=cls, singleton=singleton, kind="class"),
        )
        return self

    def register_factory(
        self,
        name: str | type,
        factory: Callable[[], Any],
        *,
        singleton: bool | None = None,
    ) -> Container:
        """Register a zero-argument ``factory`` under ``name``."""
        name = _normalize(name)
        if not callable(factory):
            raise TypeError(f"register_factory() expects a callable, got {factory!r}")
        if singleton is None:
            singleton = self.settings.default_singleton
        self._definitions[name] = ServiceDefinition(factory, singleton=singleton)
        logger.debug(
            f"Registered factory {token_name(name)}",
            token=token_name(name),
            singleton=singleton,
        )
        self.bus.emit(
            LifecycleEvent.REGISTERED,
            RegisteredEvent(token=name, singleton=singleton, kind="factory"),
        )
        return self

    def has(self, token: Any) -> bool:
        """Whether ``token`` itself has a definition; no name fallback."""
        try:
            return _normalize(token) in self._definitions
        except TypeError:
            return False

    def get_service_names(self) -> list[str]:
        """Names of all string-keyed definitions, class aliases included."""
        return [key for key in self._definitions if isinstance(key, str)]

    # Resolution

    @overload
    def resolve(self, token: type[T]) -> T: ...

    @overload
    def resolve(self, token: str) -> Any: ...

    def resolve(self, token: Any) -> Any:
        """Return the service registered for ``token``.

        Raises:
            CircularDependencyError: If ``token`` is already being resolved
            ServiceNotFoundError: If ``token`` has no definition
        """
        key = _normalize(token)
        self._stack.check(key)
        definition = self._definitions.get(key)
        if definition is None:
            raise ServiceNotFoundError(key)

        if definition.has_instance:
            self.bus.emit(
                LifecycleEvent.RESOLVED,
                ResolvedEvent(
                    token=key,
                    instance=definition.instance,
                    singleton=True,
                    from_cache=True,
                ),
            )
            return definition.instance

        with self._stack.push(key):
            instance = self._instantiate(definition.producer)
            if definition.singleton:
                definition.instance = instance
            self.bus.emit(
                LifecycleEvent.RESOLVED,
                ResolvedEvent(
                    token=key,
                    instance=instance,
                    singleton=definition.singleton,
                    from_cache=False,
                ),
            )
        return instance

    def construct(self, cls: type[T], overrides: Overrides | None = None) -> T:
        """Build a fresh ``cls`` without caching or registering it.

        Args:
            cls: Class to build; it does not need to be registered
            overrides: Literal values by constructor position (0 is the
                first parameter after ``self``) or by parameter name
        """
        if not inspect.isclass(cls):
            raise TypeError(f"construct() expects a class, got {cls!r}")
        overrides = dict(overrides or {})
        with self._stack.push(cls):
            instance = self._instantiate(cls, overrides)
            self.bus.emit(
                LifecycleEvent.CONSTRUCTED,
                ConstructedEvent(token=cls, instance=instance, overrides=overrides),
            )
        return instance

    def _instantiate(self, producer: Any, overrides: Overrides | None = None) -> Any:
        if not inspect.isclass(producer):
            return producer()

        args, kwargs = self._constructor_arguments(producer, overrides or {})
        instance = producer(*args, **kwargs)
        self._wire(instance, producer)
        return instance

    def _constructor_arguments(
        self, cls: type, overrides: Overrides
    ) -> tuple[list[Any], dict[str, Any]]:
        init = cls.__init__
        if init is object.__init__:
            return [], {}
        try:
            signature = inspect.signature(init)
        except (TypeError, ValueError):
            return [], {}
        parameters = [
            p
            for p in list(signature.parameters.values())[1:]
            if p.kind not in _SKIPPED_KINDS
        ]
        hints = _parameter_hints(init)

        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        missing_positional = False
        for index, parameter in enumerate(parameters):
            found, value = self._argument(cls, index, parameter, hints, overrides)
            if parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
                if missing_positional:
                    continue
                if found:
                    args.append(value)
                elif parameter.default is not inspect.Parameter.empty:
                    args.append(parameter.default)
                else:
                    missing_positional = True
            elif found:
                kwargs[parameter.name] = value
        return args, kwargs

    def _argument(
        self,
        cls: type,
        index: int,
        parameter: inspect.Parameter,
        hints: dict[str, Any],
        overrides: Overrides,
    ) -> tuple[bool, Any]:
        if index in overrides:
            return True, overrides[index]
        if parameter.name in overrides:
            return True, overrides[parameter.name]

        annotation, marker = split_annotation(
            hints.get(parameter.name, parameter.annotation)
        )
        explicit = param_target(cls, index)
        if explicit is None and marker is not None:
            explicit = marker.target
        if explicit is not None:
            return True, self.resolve(explicit)

        if inspect.isclass(annotation):
            if annotation in self._definitions:
                return True, self.resolve(annotation)
            if annotation.__name__ in self._definitions:
                return True, self.resolve(annotation.__name__)
        elif isinstance(annotation, str) and annotation in self._definitions:
            return True, self.resolve(annotation)

        if parameter.default is not inspect.Parameter.empty:
            return False, None
        if inspect.isclass(annotation):
            raise ServiceNotFoundError(annotation, parameter=parameter.name, dependent=cls)
        return False, None

    def _wire(self, instance: Any, cls: type) -> None:
        subscriptions: list[Unsubscribe] = []
        try:
            subscriptions.extend(apply_telemetry(instance, cls, self.bus))
            subscriptions.extend(apply_publish_subscribe(instance, cls, self.bus))
            jobs = arm_schedules(
                instance,
                cls,
                backend=self.settings.scheduler_backend,
                horizon_minutes=self.settings.schedule_horizon_minutes,
                clock=self.clock,
            )
        except Exception:
            for unsubscribe in subscriptions:
                unsubscribe()
            raise
        self._subscriptions.extend(subscriptions)
        self._jobs = [job for job in self._jobs if job.active] + jobs
        self._inject_properties(instance, cls)

    def _inject_properties(self, instance: Any, cls: type) -> None:
        for attribute, target in property_targets(cls).items():
            try:
                setattr(instance, attribute, self.resolve(target))
            except Exception as e:
                failure = PropertyInjectionError(cls, attribute, target, e)
                logger.warning(
                    failure.message,
                    code=failure.code.code,
                    attribute=attribute,
                    exc_info=(type(e), e, e.__traceback__),
                )

    # Lifecycle

    def stop_schedules(self) -> None:
        """Stop every scheduled job; registrations are left in place."""
        jobs, self._jobs = self._jobs, []
        for job in jobs:
            job.stop()
        if jobs:
            logger.debug(f"Stopped {len(jobs)} scheduled job(s)")

    @property
    def jobs(self) -> list[ScheduledJob]:
        """Jobs still running; ones that stopped themselves are dropped."""
        self._jobs = [job for job in self._jobs if job.active]
        return list(self._jobs)

    def clear(self) -> None:
        """Stop jobs, drop pipeline subscriptions and discard every definition."""
        self.stop_schedules()
        subscriptions, self._subscriptions = self._subscriptions, []
        for unsubscribe in subscriptions:
            unsubscribe()
        count = len(self._definitions)
        self._definitions.clear()
        logger.debug("Container cleared", count=count)
        self.bus.emit(LifecycleEvent.CLEARED, ClearedEvent(count=count))

    def fork(self, *, carry_singletons: bool = False) -> Container:
        """Return an independent container with copies of the definitions.

        Cached singletons are shared with the fork when ``carry_singletons``
        is set and rebuilt on first use otherwise.
        """
        child = Container(settings=self.settings, clock=self.clock)
        # class and name keys share one definition; keep that in the copy
        clones: dict[int, ServiceDefinition] = {}
        for key, definition in self._definitions.items():
            clone = clones.get(id(definition))
            if clone is None:
                clone = clones[id(definition)] = definition.clone(carry_singletons)
            child._definitions[key] = clone
        return child

    # Events

    def on(self, event: str | LifecycleEvent, listener: Listener) -> Unsubscribe:
        """Subscribe ``listener`` to ``event`` on this container's bus."""
        return self.bus.on(event, listener)

    def off(self, event: str | LifecycleEvent, listener: Listener) -> None:
        self.bus.off(event, listener)

    def __contains__(self, token: Any) -> bool:
        return self.has(token)

    def __repr__(self) -> str:
        return (
            f"Container(definitions={len(self._definitions)}, "
            f"jobs={len(self._jobs)})"
        )


container = Container()


def get_container() -> Container:
    """Return the process-wide default container."""
    return container
