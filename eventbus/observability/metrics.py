"""Counters and gauges for registry activity (publishes, deliveries, failures)."""

import threading
from typing import Dict


class Metrics:
    """In-memory metrics collector. A disabled collector accepts updates and records nothing."""

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled
        self._counters: Dict[str, int] = {}
        self._gauges: Dict[str, int] = {}
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def increment(self, name: str, value: int = 1) -> None:
        """Increment a counter."""
        if not self._enabled:
            return
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + value

    def set_gauge(self, name: str, value: int) -> None:
        """Set a gauge value."""
        if not self._enabled:
            return
        with self._lock:
            self._gauges[name] = value

    def get_counter(self, name: str) -> int:
        return self._counters.get(name, 0)

    def get_gauge(self, name: str) -> int:
        return self._gauges.get(name, 0)

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._gauges.clear()

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        """Return a snapshot of all metrics."""
        with self._lock:
            return {
                "counters": dict(self._counters),
                "gauges": dict(self._gauges),
            }
