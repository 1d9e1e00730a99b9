from typing import Annotated

import pytest

from conduit import Inject, InstanceSide, MetadataKind, inject_param, inject_property, metadata
from conduit.injection.markers import param_target, property_targets, split_annotation


class Logger:
    pass


def test_inject_requires_class_or_name():
    with pytest.raises(TypeError):
        Inject(42)
    with pytest.raises(TypeError):
        Inject("")


def test_inject_attribute_records_instance_side():
    class Service:
        log = Inject(Logger)

    assert metadata.get(MetadataKind.INJECT, InstanceSide(Service)) == {"log": Logger}
    assert metadata.get(MetadataKind.INJECT, Service) is None


def test_builders_record_static_side():
    class Service:
        def __init__(self, log):
            self.log = log

    inject_param(Service, 0, "log")
    inject_property(Service, "audit", Logger)
    assert metadata.get(MetadataKind.INJECT, Service) == {"param_0": "log", "audit": Logger}
    assert param_target(Service, 0) == "log"
    assert param_target(Service, 1) is None
    assert property_targets(Service) == {"audit": Logger}


def test_builder_validation():
    class Service:
        pass

    with pytest.raises(ValueError):
        inject_param(Service, -1, "x")
    with pytest.raises(ValueError):
        inject_property(Service, "param_0", "x")


def test_subclass_inherits_and_overrides_properties():
    class Base:
        log = Inject(Logger)
        store = Inject("store")

    class Child(Base):
        store = Inject("child-store")

    assert property_targets(Child) == {"log": Logger, "store": "child-store"}


def test_split_annotation():
    marker = Inject("log")
    assert split_annotation(Annotated[Logger, marker]) == (Logger, marker)
    assert split_annotation(Annotated[Logger, "doc"]) == (Logger, None)
    assert split_annotation(Logger) == (Logger, None)
