import logging
from typing import TYPE_CHECKING, Annotated

import pytest

from conduit import (
    CircularDependencyError,
    ConduitSettings,
    Container,
    Inject,
    ServiceNotFoundError,
    inject_param,
    inject_property,
)

if TYPE_CHECKING:
    from decimal import Decimal


class Database:
    pass


class Repository:
    def __init__(self, db: Database):
        self.db = db


class Clock:
    pass


class Report:
    def __init__(self, repo: Repository, title: str, clock: Clock | None = None):
        self.repo = repo
        self.title = title
        self.clock = clock


class CycleA:
    def __init__(self, b: "CycleB"):
        self.b = b


class CycleB:
    def __init__(self, a: CycleA):
        self.a = a


class Mailer:
    def __init__(self, transport: Annotated[object, Inject("smtp")], retries: int = 3):
        self.transport = transport
        self.retries = retries


class RatedMailer:
    def __init__(
        self,
        transport: "Annotated[object, Inject('smtp')]",
        rate: "Decimal | None" = None,
    ):
        self.transport = transport
        self.rate = rate


def test_singleton_returns_same_instance(container):
    container.register(Database)
    assert container.resolve(Database) is container.resolve(Database)


def test_transient_returns_new_instances(container):
    container.register(Database, singleton=False)
    assert container.resolve(Database) is not container.resolve(Database)


def test_default_lifecycle_comes_from_settings():
    c = Container(settings=ConduitSettings(default_singleton=False))
    c.register(Database)
    assert c.resolve(Database) is not c.resolve(Database)


def test_register_aliases_class_by_name(container):
    container.register(Database)
    assert container.has(Database)
    assert container.has("Database")
    assert container.resolve("Database") is container.resolve(Database)
    assert container.get_service_names() == ["Database"]


def test_has_is_exact_token_only(container):
    container.register_factory("config", lambda: {})
    assert container.has("config")
    assert not container.has("Config")
    assert not container.has(42)


def test_register_is_chainable_and_overwrites(container):
    class Database:  # noqa: F811 - same name, different class
        pass

    first = globals()["Database"]
    container.register(first).register(Database)
    assert isinstance(container.resolve("Database"), Database)
    assert isinstance(container.resolve(first), first)


def test_unregistered_service_message(container):
    with pytest.raises(ServiceNotFoundError) as exc:
        container.resolve("Missing")
    assert "Missing" in str(exc.value)
    assert "not registered" in str(exc.value)


def test_constructor_dependencies_are_inferred(container):
    container.register(Database).register(Repository)
    repo = container.resolve(Repository)
    assert repo.db is container.resolve(Database)


def test_missing_class_dependency_names_parameter_and_dependent(container):
    container.register(Repository)
    with pytest.raises(ServiceNotFoundError) as exc:
        container.resolve(Repository)
    message = exc.value.message
    assert "'Database'" in message
    assert "'db'" in message
    assert "Repository" in message


def test_circular_dependency_lists_both_tokens(container):
    container.register(CycleA).register(CycleB)
    with pytest.raises(CircularDependencyError) as exc:
        container.resolve(CycleA)
    message = exc.value.message
    assert "CycleA" in message and "CycleB" in message
    assert exc.value.dependency_chain == ["CycleA", "CycleB", "CycleA"]


def test_failed_resolution_leaves_stack_clean(container):
    container.register(CycleA).register(CycleB)
    with pytest.raises(CircularDependencyError):
        container.resolve(CycleA)
    container.register_factory(CycleB, lambda: "stub")
    assert container.resolve(CycleA).b == "stub"


def test_construct_detects_cycles(container):
    container.register(CycleA).register(CycleB)
    with pytest.raises(CircularDependencyError) as exc:
        container.construct(CycleA)
    assert exc.value.dependency_chain == ["CycleA", "CycleB", "CycleA"]


def test_failed_singleton_construction_is_not_cached(container):
    attempts = []

    class Flaky:
        def __init__(self):
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("warming up")

    container.register(Flaky)
    with pytest.raises(RuntimeError):
        container.resolve(Flaky)
    assert container.resolve(Flaky) is container.resolve(Flaky)
    assert len(attempts) == 2


def test_factory_called_without_arguments(container):
    calls = []

    def make_settings():
        calls.append(1)
        return {"debug": True}

    container.register_factory("settings", make_settings)
    assert container.resolve("settings") is container.resolve("settings")
    assert calls == [1]


def test_transient_factory_called_every_time(container):
    container.register_factory("counter", lambda: object(), singleton=False)
    assert container.resolve("counter") is not container.resolve("counter")


def test_factory_returning_none_is_cached(container):
    calls = []
    container.register_factory("nothing", lambda: calls.append(1))
    assert container.resolve("nothing") is None
    assert container.resolve("nothing") is None
    assert calls == [1]


def test_construct_mixes_injection_and_literals(container):
    container.register(Database).register(Repository)
    report = container.construct(Report, {1: "Quarterly"})
    assert report.repo is container.resolve(Repository)
    assert report.title == "Quarterly"
    assert report.clock is None
    assert container.construct(Report, {"title": "Weekly"}).title == "Weekly"


def test_construct_never_caches_or_registers(container):
    container.register(Database).register(Repository)
    first = container.construct(Report, {1: "a"})
    second = container.construct(Report, {1: "a"})
    assert first is not second
    assert not container.has(Report)


def test_construct_emits_constructed_event(container):
    container.register(Database).register(Repository)
    events = []
    container.on("constructed", events.append)
    report = container.construct(Report, {1: "x"})
    assert events[0].instance is report
    assert events[0].overrides == {1: "x"}


def test_annotated_inject_marker(container):
    container.register_factory("smtp", lambda: "smtp-transport")
    mailer = container.construct(Mailer)
    assert mailer.transport == "smtp-transport"
    assert mailer.retries == 3


def test_inject_marker_survives_unresolvable_sibling_annotation(container):
    container.register_factory("smtp", lambda: "smtp-transport")
    mailer = container.construct(RatedMailer)
    assert mailer.transport == "smtp-transport"
    assert mailer.rate is None


def test_inject_param_builder(container):
    class Exporter:
        def __init__(self, sink, fmt="csv"):
            self.sink = sink
            self.fmt = fmt

    inject_param(Exporter, 0, "sink")
    container.register_factory("sink", lambda: [])
    container.register(Exporter)
    assert container.resolve(Exporter).sink == []


def test_property_injection_from_both_sides(container):
    class Service:
        db = Inject(Database)
        mailer = Inject("mailer")

    inject_property(Service, "clock", Clock)
    inject_property(Service, "mailer", "static-mailer")
    container.register(Database).register(Clock).register(Service)
    container.register_factory("mailer", lambda: "instance-side")
    container.register_factory("static-mailer", lambda: "static-side")

    service = container.resolve(Service)
    assert service.db is container.resolve(Database)
    assert isinstance(service.clock, Clock)
    assert service.mailer == "instance-side"
    assert "db" not in Service.__dict__


def test_property_injection_failure_is_logged(container, caplog):
    class Service:
        cache = Inject("cache")

    container.register(Service)
    with caplog.at_level(logging.WARNING, logger="conduit"):
        service = container.resolve(Service)

    assert not hasattr(service, "cache")
    record = next(r for r in caplog.records if r.levelno == logging.WARNING)
    assert record.conduit_context["code"] == "INJECTION_PROPERTY"
    assert "cache" in record.getMessage()


def test_lifecycle_events(container):
    seen = []
    for name in ("registered", "resolved", "cleared"):
        container.on(name, lambda p, name=name: seen.append((name, p)))

    container.register(Database)
    container.resolve(Database)
    container.resolve(Database)
    container.clear()

    kinds = [name for name, _ in seen]
    assert kinds == ["registered", "resolved", "resolved", "cleared"]
    assert seen[0][1].kind == "class"
    assert [p.from_cache for n, p in seen if n == "resolved"] == [False, True]
    # class key and name alias
    assert seen[-1][1].count == 2


def test_off_removes_listener(container):
    seen = []
    container.on("registered", seen.append)
    container.off("registered", seen.append)
    container.register(Database)
    assert seen == []


def test_clear_keeps_user_listeners(container):
    seen = []
    container.on("registered", seen.append)
    container.clear()
    container.register(Database)
    assert len(seen) == 1


def test_fork_recreates_singletons_by_default(container):
    container.register(Database)
    original = container.resolve(Database)
    child = container.fork()
    assert child.resolve(Database) is not original
    assert child.resolve("Database") is child.resolve(Database)


def test_fork_can_carry_singletons(container):
    container.register(Database)
    original = container.resolve(Database)
    child = container.fork(carry_singletons=True)
    assert child.resolve(Database) is original

    child.register(Database)
    assert child.resolve(Database) is not original
    assert container.resolve(Database) is original


def test_fork_is_independent(container):
    container.register(Database)
    child = container.fork()
    child.register(Clock)
    assert not container.has(Clock)
    assert child.settings is container.settings


def test_invalid_tokens(container):
    with pytest.raises(TypeError):
        container.resolve(42)
    with pytest.raises(TypeError):
        container.register("Database")
    with pytest.raises(TypeError):
        container.construct("Database")
