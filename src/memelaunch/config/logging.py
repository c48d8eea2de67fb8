"""Logging configuration using structlog.

Every event carries the service name and version so that logs from
several launchpad instances can be told apart once aggregated.
"""

import logging
import sys

import structlog
from structlog.typing import EventDict, Processor

from memelaunch.config.settings import Settings, get_settings


def _service_context(settings: Settings) -> Processor:
    def add_service(_logger: object, _method: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", settings.app_name)
        event_dict.setdefault("version", settings.app_version)
        return event_dict

    return add_service


def build_processors(settings: Settings) -> list[Processor]:
    """Processor chain: console output in debug, JSON lines otherwise."""
    renderer: Processor = (
        structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _service_context(settings),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        renderer,
    ]


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and route uvicorn's stdlib loggers to stdout."""
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level)

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).setLevel(log_level)
