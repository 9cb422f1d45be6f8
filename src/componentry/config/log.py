"""Loguru setup for applications embedding componentry."""

import sys
from typing import Any

from loguru import logger

from .settings import settings


def configure_logging(level: str | None = None, sink: Any = None) -> int:
    """Replace loguru's handlers with one sink at the configured level.

    Libraries never call this; the host application does, once.

    Args:
        level: Log level name (defaults to ``settings.LOG_LEVEL``)
        sink: Any loguru sink (defaults to stderr)

    Returns:
        The loguru handler id
    """
    logger.remove()
    return logger.add(sink or sys.stderr, level=(level or settings.LOG_LEVEL).upper())
