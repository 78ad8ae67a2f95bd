"""Settings for the event registry, read from the environment (and a .env file if present)."""

import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

ENV_PREFIX = "EVENTBUS_"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")
_LOG_STREAMS = ("stdout", "stderr")


class EventBusSettings(BaseModel):
    """Logging and metrics switches for registries created in this process."""

    log_level: str = "INFO"
    log_stream: str = "stdout"
    metrics_enabled: bool = True

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level == "WARN":
            level = "WARNING"
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @field_validator("log_stream")
    @classmethod
    def _check_stream(cls, value: str) -> str:
        stream = value.strip().lower()
        if stream not in _LOG_STREAMS:
            raise ValueError(f"log_stream must be one of {_LOG_STREAMS}")
        return stream

    @property
    def level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "EventBusSettings":
        """
        Build settings from EVENTBUS_* variables. load_dotenv() runs first when reading os.environ.
        A field with an invalid value keeps its default.
        """
        if environ is None:
            load_dotenv()
            environ = dict(os.environ)
        values: Dict[str, Any] = {}
        for field_name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + field_name.upper())
            if raw is None or not raw.strip():
                continue
            try:
                cls.model_validate({field_name: raw})
            except ValidationError:
                continue
            values[field_name] = raw
        return cls.model_validate(values)


_settings: Optional[EventBusSettings] = None


def get_settings() -> EventBusSettings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = EventBusSettings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
