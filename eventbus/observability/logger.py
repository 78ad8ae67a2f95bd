"""Structured logging for registry activity (subscribe, deliver, failures)."""

import logging
import sys
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a logger with a single stream handler; level and stream come from settings unless given."""
    from eventbus.config import get_settings

    settings = get_settings()
    logger = logging.getLogger(name)
    if not logger.handlers:
        stream = sys.stderr if settings.log_stream == "stderr" else sys.stdout
        handler = logging.StreamHandler(stream)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
            )
        )
        logger.addHandler(handler)
        logger.setLevel(level if level is not None else settings.level_number)
    elif level is not None:
        logger.setLevel(level)
    return logger
