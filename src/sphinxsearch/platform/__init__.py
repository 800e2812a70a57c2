"""Cross-cutting concerns: settings and structured logging."""

from .config import SphinxSettings, get_settings
from .logging import configure_logging, get_logger

__all__ = ["SphinxSettings", "get_settings", "configure_logging", "get_logger"]
