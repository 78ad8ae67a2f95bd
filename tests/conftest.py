import pytest

from eventbus import EventBusSettings, EventRegistry, default_registry
from eventbus.config import reset_settings


@pytest.fixture
def settings() -> EventBusSettings:
    return EventBusSettings()


@pytest.fixture
def registry(settings: EventBusSettings) -> EventRegistry:
    return EventRegistry("test", settings=settings)


@pytest.fixture
def clean_default_registry():
    default_registry.clear()
    yield default_registry
    default_registry.clear()


@pytest.fixture
def fresh_settings():
    reset_settings()
    yield
    reset_settings()
