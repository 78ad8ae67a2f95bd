"""In-process event registry: subscribe listeners to named events and publish payloads to them."""

from typing import Any

from eventbus.channel import Channel, Listener
from eventbus.config import EventBusSettings, get_settings
from eventbus.errors import ListenerInvocationFailure
from eventbus.registry import EventRegistry, default_registry


def subscribe(event_name: str, listener: Listener) -> None:
    """Subscribe listener to event_name on the default registry."""
    default_registry.subscribe(event_name, listener)


def unsubscribe(event_name: str, listener: Listener) -> None:
    """Unsubscribe listener from event_name on the default registry."""
    default_registry.unsubscribe(event_name, listener)


def publish(event_name: str, payload: Any = None) -> None:
    """Publish payload to event_name on the default registry."""
    default_registry.publish(event_name, payload)


on = subscribe
off = unsubscribe
emit = publish

__all__ = [
    "Channel",
    "EventBusSettings",
    "EventRegistry",
    "Listener",
    "ListenerInvocationFailure",
    "default_registry",
    "emit",
    "get_settings",
    "off",
    "on",
    "publish",
    "subscribe",
    "unsubscribe",
]
