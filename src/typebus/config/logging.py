"""structlog configuration.

Modules obtain loggers through :func:`get_logger` and emit dotted event
names with key/value context, e.g. ``logger.debug("bus.registered", ...)``.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from typebus.config.settings import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog from *settings* (defaults to :func:`get_settings`).

    Raises:
        ConfigurationError: The environment holds an invalid setting.
    """
    if settings is None:
        settings = get_settings()

    level = logging.getLevelName(settings.log_level)
    renderer: Any
    if settings.log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger bound to *name*."""
    return structlog.get_logger(name)
