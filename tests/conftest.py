"""Top-level pytest configuration for conduit."""

import pytest

from conduit import ConduitSettings, Container, get_container


@pytest.fixture
def settings() -> ConduitSettings:
    return ConduitSettings()


@pytest.fixture
def container(settings):
    """A fresh container; its jobs and subscriptions are torn down afterwards."""
    c = Container(settings=settings)
    yield c
    c.clear()


@pytest.fixture(autouse=True)
def reset_default_container():
    """Keep ``@injectable`` registrations from leaking between tests."""
    yield
    get_container().clear()
