import io
import logging

from eventbus.config import EventBusSettings
from eventbus.observability import Metrics, get_logger


def test_get_logger_attaches_one_handler(monkeypatch) -> None:
    stream = io.StringIO()
    monkeypatch.setattr("sys.stdout", stream)

    logger = get_logger("eventbus.tests.single")
    again = get_logger("eventbus.tests.single")

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.handlers[0].stream is stream
    assert logger.level == logging.INFO


def test_get_logger_explicit_level() -> None:
    logger = get_logger("eventbus.tests.level", logging.DEBUG)

    assert logger.level == logging.DEBUG
    assert get_logger("eventbus.tests.level", logging.WARNING).level == logging.WARNING


def test_get_logger_stream_from_settings(monkeypatch) -> None:
    stream = io.StringIO()
    monkeypatch.setattr("sys.stderr", stream)
    monkeypatch.setattr(
        "eventbus.config._settings", EventBusSettings(log_stream="stderr", log_level="ERROR")
    )

    logger = get_logger("eventbus.tests.stderr")

    assert logger.handlers[0].stream is stream
    assert logger.level == logging.ERROR


def test_metrics_counters_and_gauges() -> None:
    metrics = Metrics()
    metrics.increment("published")
    metrics.increment("published", 2)
    metrics.set_gauge("events", 4)

    assert metrics.get_counter("published") == 3
    assert metrics.get_counter("missing") == 0
    assert metrics.snapshot() == {"counters": {"published": 3}, "gauges": {"events": 4}}

    metrics.reset()
    assert metrics.snapshot() == {"counters": {}, "gauges": {}}


def test_disabled_metrics_record_nothing() -> None:
    metrics = Metrics(enabled=False)
    metrics.increment("published")
    metrics.set_gauge("events", 1)

    assert not metrics.enabled
    assert metrics.get_counter("published") == 0
    assert metrics.get_gauge("events") == 0
