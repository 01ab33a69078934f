"""Core configuration, logging and error types."""

from rollbook.core.config import Settings, get_settings
from rollbook.core.logging import configure_logging

__all__ = ["Settings", "configure_logging", "get_settings"]
