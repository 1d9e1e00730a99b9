from conduit.metadata import (
    InstanceSide,
    MetadataKind,
    MetadataStore,
    MethodDeclaration,
    declare,
    instance_metadata,
    metadata,
    record_method,
)


def test_define_get_has_delete():
    store = MetadataStore()

    class Target:
        pass

    assert store.get(MetadataKind.INJECTABLE, Target) is None
    assert store.get(MetadataKind.INJECTABLE, Target, default={}) == {}
    store.define(MetadataKind.INJECTABLE, {"singleton": True}, Target)
    assert store.has(MetadataKind.INJECTABLE, Target)
    assert store.get(MetadataKind.INJECTABLE, Target) == {"singleton": True}
    store.delete(MetadataKind.INJECTABLE, Target)
    assert not store.has(MetadataKind.INJECTABLE, Target)


def test_static_and_instance_sides_are_separate_targets():
    store = MetadataStore()

    class Target:
        pass

    store.define(MetadataKind.INJECT, {"a": "static"}, Target)
    store.define(MetadataKind.INJECT, {"a": "instance"}, InstanceSide(Target))
    assert store.get(MetadataKind.INJECT, Target) == {"a": "static"}
    assert store.get(MetadataKind.INJECT, InstanceSide(Target)) == {"a": "instance"}
    assert InstanceSide(Target) == InstanceSide(Target)


def _mark(value):
    def decorator(func):
        return declare(
            func,
            lambda owner, name: record_method(MetadataKind.TELEMETRY, owner, name, value),
        )

    return decorator


def test_method_declaration_records_on_class_creation_and_restores_function():
    class Service:
        @_mark("first")
        def work(self):
            return 42

    assert not isinstance(Service.__dict__["work"], MethodDeclaration)
    assert Service().work() == 42
    assert metadata.get(MetadataKind.TELEMETRY, InstanceSide(Service)) == {"work": "first"}


def test_instance_metadata_merges_base_first():
    class Base:
        @_mark("base")
        def work(self):
            pass

        @_mark("base")
        def other(self):
            pass

    class Child(Base):
        @_mark("child")
        def work(self):
            pass

    merged = instance_metadata(MetadataKind.TELEMETRY, Child)
    assert merged == {"work": "child", "other": "base"}
    assert instance_metadata(MetadataKind.TELEMETRY, Base) == {"work": "base", "other": "base"}
