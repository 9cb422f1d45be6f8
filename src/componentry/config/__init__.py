"""Configuration system for componentry."""

from .log import configure_logging
from .settings import Settings, load_settings, settings

__all__ = ["Settings", "configure_logging", "load_settings", "settings"]
