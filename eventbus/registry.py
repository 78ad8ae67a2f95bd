"""In-memory event registry: event name -> listeners, with synchronous fault-isolated publish."""

import threading
from typing import Any, Dict, List, Optional

from eventbus.channel import Channel, Listener
from eventbus.config import EventBusSettings, get_settings
from eventbus.errors import FailureHandler, ListenerInvocationFailure, describe_listener, log_failure
from eventbus.observability import Metrics, get_logger


class EventRegistry:
    """
    Maps event names to channels of listeners.

    Listeners are matched by identity, kept in subscription order and invoked on the
    publishing thread. publish() works on a copy of the listener list taken under the
    lock, so listeners may subscribe, unsubscribe or publish re-entrantly; such changes
    apply from the next publish() on.
    """

    def __init__(
        self,
        name: str = "default",
        on_failure: Optional[FailureHandler] = None,
        settings: Optional[EventBusSettings] = None,
    ) -> None:
        self._name = name
        self._settings = settings or get_settings()
        self._logger = get_logger(f"eventbus.registry.{name}", self._settings.level_number)
        self._channels: Dict[str, Channel] = {}
        self._lock = threading.Lock()
        self._on_failure = on_failure or self._log_failure
        self._metrics = Metrics(enabled=self._settings.metrics_enabled)

    @property
    def name(self) -> str:
        return self._name

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    def subscribe(self, event_name: str, listener: Listener) -> None:
        """Register listener for event_name. Subscribing the same listener again is a no-op."""
        if not isinstance(event_name, str):
            raise TypeError(f"event_name must be a str, got {type(event_name).__name__}")
        if not callable(listener):
            raise TypeError(f"listener must be callable, got {type(listener).__name__}")
        with self._lock:
            channel = self._channels.get(event_name)
            if channel is None:
                channel = Channel(event_name)
                self._channels[event_name] = channel
            added = channel.add(listener)
            active = self._active_count()
        if not added:
            return
        self._metrics.increment("subscribed")
        self._metrics.set_gauge("events", active)
        self._logger.debug(
            "subscribed",
            extra={"event_name": event_name, "listener": describe_listener(listener)},
        )

    def unsubscribe(self, event_name: str, listener: Listener) -> None:
        """Remove listener from event_name. Unknown events and listeners are ignored."""
        if not isinstance(event_name, str):
            return
        with self._lock:
            channel = self._channels.get(event_name)
            if channel is None or not channel.discard(listener):
                return
            if not len(channel):
                del self._channels[event_name]
            active = self._active_count()
        self._metrics.increment("unsubscribed")
        self._metrics.set_gauge("events", active)
        self._logger.debug(
            "unsubscribed",
            extra={"event_name": event_name, "listener": describe_listener(listener)},
        )

    def publish(self, event_name: str, payload: Any = None) -> None:
        """
        Call every listener registered for event_name with payload, in subscription order.
        Listener exceptions are reported to the failure handler and never reach the caller.
        """
        with self._lock:
            channel = self._channels.get(event_name)
            if channel is None or not len(channel):
                return
            listeners = channel.snapshot()
        failures = channel.deliver(payload, listeners, self._on_failure)
        self._metrics.increment("published")
        self._metrics.increment("delivered", len(listeners) - failures)
        if failures:
            self._metrics.increment("failures", failures)

    def listeners(self, event_name: str) -> List[Listener]:
        """Listeners for event_name in delivery order (a copy)."""
        with self._lock:
            channel = self._channels.get(event_name)
            return channel.snapshot() if channel is not None else []

    def listener_count(self, event_name: str) -> int:
        with self._lock:
            channel = self._channels.get(event_name)
            return len(channel) if channel is not None else 0

    def has_listeners(self, event_name: str) -> bool:
        return self.listener_count(event_name) > 0

    def event_names(self) -> List[str]:
        """Event names that currently have at least one listener, in first-subscription order."""
        with self._lock:
            return list(self._channels)

    def clear(self, event_name: Optional[str] = None) -> None:
        """Drop every listener for event_name, or for all events when event_name is None."""
        with self._lock:
            if event_name is None:
                self._channels.clear()
            else:
                self._channels.pop(event_name, None)
            active = self._active_count()
        self._metrics.set_gauge("events", active)

    def list_events(self) -> List[Dict[str, Any]]:
        """Return list of {name, listeners} for each event with listeners."""
        with self._lock:
            return [
                {"name": name, "listeners": len(channel)}
                for name, channel in self._channels.items()
            ]

    def event_stats(self) -> Dict[str, Dict[str, int]]:
        """Return { event_name: { published, delivered, failures, listeners } } for every event with listeners."""
        with self._lock:
            return {
                name: {
                    "published": channel.messages_published,
                    "delivered": channel.messages_delivered,
                    "failures": channel.delivery_failures,
                    "listeners": len(channel),
                }
                for name, channel in self._channels.items()
            }

    def _active_count(self) -> int:
        return len(self._channels)

    def _log_failure(self, failure: ListenerInvocationFailure) -> None:
        log_failure(failure, self._logger)

    def __len__(self) -> int:
        return len(self.event_names())

    def __contains__(self, event_name: object) -> bool:
        return isinstance(event_name, str) and self.has_listeners(event_name)

    def __repr__(self) -> str:
        return f"EventRegistry(name={self._name!r}, events={len(self)})"


default_registry = EventRegistry()
