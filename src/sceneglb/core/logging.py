"""Logging for sceneglb: stdout handler setup and the exporter's callback bridge.

The exporter reports failures through a plain callable
``log(level, fmt, *args)`` with ``%``-style formatting, where level 0 is
info, 1 warning and 2 error. ``logging_callback`` routes those calls into
a stdlib logger so CLI runs and pipeline steps share one output stream.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable

LEVEL_INFO = 0
LEVEL_WARNING = 1
LEVEL_ERROR = 2

LOG_LEVELS = {
    LEVEL_INFO: logging.INFO,
    LEVEL_WARNING: logging.WARNING,
    LEVEL_ERROR: logging.ERROR,
}

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

LoggerCallback = Callable[..., None]

logger = logging.getLogger("sceneglb")


def setup_logging(level: str | int = "INFO") -> None:
    """Send sceneglb log records to stdout at ``level`` (name or number)."""
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def logging_callback(log: logging.Logger | None = None) -> LoggerCallback:
    """Adapt ``log`` (default: the ``sceneglb`` logger) to the callback shape.

    Unknown severities are logged as errors.
    """
    target = log or logger

    def _callback(level: int, fmt: str, *args) -> None:
        target.log(LOG_LEVELS.get(level, logging.ERROR), fmt, *args)

    return _callback
