"""Listener failure type and the default diagnostic sink."""

from typing import Any, Callable


class ListenerInvocationFailure(Exception):
    """A listener raised while an event was being delivered. Reported, never re-raised by publish()."""

    def __init__(self, event_name: str, listener: Callable[[Any], Any], error: Exception) -> None:
        super().__init__(f"listener {describe_listener(listener)} failed for event {event_name!r}: {error!r}")
        self.event_name = event_name
        self.listener = listener
        self.error = error
        self.__cause__ = error


FailureHandler = Callable[[ListenerInvocationFailure], None]


def describe_listener(listener: Callable[[Any], Any]) -> str:
    """Readable name for a listener in log records."""
    name = getattr(listener, "__qualname__", None) or getattr(listener, "__name__", None)
    if name is None:
        return repr(listener)
    module = getattr(listener, "__module__", None)
    return f"{module}.{name}" if module else name


def log_failure(failure: ListenerInvocationFailure, logger) -> None:
    """Log a listener failure with the original traceback."""
    error = failure.error
    logger.error(
        "listener_failed",
        exc_info=(type(error), error, error.__traceback__),
        extra={
            "event_name": failure.event_name,
            "listener": describe_listener(failure.listener),
            "error": str(error),
        },
    )
