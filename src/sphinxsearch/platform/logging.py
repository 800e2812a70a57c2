"""
Sphinxsearch Structured Logging

Configures structured logging using structlog. Modules obtain their logger
through get_logger() so events carry the module name.
"""

import logging
import sys
from enum import IntEnum
from typing import Any, Optional

import structlog

from sphinxsearch.platform.config import SphinxSettings, get_settings


def render_protocol_enums(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Log daemon enums (status, match/sort mode) by name instead of number."""
    for key, value in event_dict.items():
        if isinstance(value, IntEnum):
            event_dict[key] = value.name
    return event_dict


def configure_logging(settings: Optional[SphinxSettings] = None) -> None:
    """Configure structured logging from APP_ENV and LOG_LEVEL."""
    settings = settings or get_settings()
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.APP_ENV == "production"
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            render_protocol_enums,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # The sphinxapi driver logs through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """Get a structured logger for a sphinxsearch module."""
    return structlog.get_logger(name)
