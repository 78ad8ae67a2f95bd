"""Channel: the ordered listener set for one event name, and its delivery loop."""

import threading
from typing import Any, Callable, Dict, List, Optional

from eventbus.errors import FailureHandler, ListenerInvocationFailure, log_failure
from eventbus.observability import get_logger

Listener = Callable[[Any], Any]

logger = get_logger("eventbus.channel")


class Channel:
    """
    Listeners for one event name, keyed by identity and kept in subscription order.
    Membership is serialized by the owning EventRegistry; delivery counters have their own lock.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        # id() -> listener; the stored reference keeps the id from being reused.
        self._listeners: Dict[int, Listener] = {}
        self._messages_published: int = 0
        self._messages_delivered: int = 0
        self._delivery_failures: int = 0
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def messages_published(self) -> int:
        return self._messages_published

    @property
    def messages_delivered(self) -> int:
        return self._messages_delivered

    @property
    def delivery_failures(self) -> int:
        return self._delivery_failures

    def add(self, listener: Listener) -> bool:
        """Add a listener. Returns False if this exact listener was already present."""
        key = id(listener)
        if key in self._listeners:
            return False
        self._listeners[key] = listener
        return True

    def discard(self, listener: Listener) -> bool:
        """Remove a listener if present. Returns True if it was removed."""
        return self._listeners.pop(id(listener), None) is not None

    def snapshot(self) -> List[Listener]:
        """Copy of the listeners in delivery order."""
        return list(self._listeners.values())

    def deliver(
        self,
        payload: Any,
        listeners: List[Listener],
        on_failure: Optional[FailureHandler] = None,
    ) -> int:
        """
        Invoke each listener in `listeners` with the same payload. A listener that raises is
        reported through on_failure (logged as listener_failed when None) and the loop moves on.
        Returns the number of failures.
        """
        logger.debug(
            "delivering",
            extra={"event_name": self._name, "listener_count": len(listeners)},
        )
        failures = 0
        for listener in listeners:
            try:
                listener(payload)
            except Exception as e:
                failures += 1
                failure = ListenerInvocationFailure(self._name, listener, e)
                if on_failure is None:
                    log_failure(failure, logger)
                else:
                    _report(on_failure, failure)
        with self._lock:
            self._messages_published += 1
            self._messages_delivered += len(listeners) - failures
            self._delivery_failures += failures
        return failures

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        return self._listeners.get(id(listener)) is listener

    def __repr__(self) -> str:
        return f"Channel(name={self._name!r}, listeners={len(self._listeners)})"


def _report(on_failure: FailureHandler, failure: ListenerInvocationFailure) -> None:
    try:
        on_failure(failure)
    except Exception as e:
        logger.exception(
            "failure_handler_error",
            extra={"event_name": failure.event_name, "error": str(e)},
        )
