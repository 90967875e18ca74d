"""Configuration and logging infrastructure."""

from .config import Settings, get_settings  # noqa: F401
from .log import get_logger  # noqa: F401

__all__ = ["Settings", "get_settings", "get_logger"]
