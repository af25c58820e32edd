"""
Logging configuration for the application.

structlog and stdlib records (uvicorn, sqlalchemy) share a single
``ProcessorFormatter`` on the root handler: console output in development,
one JSON object per line in production.
"""

import logging
import sys
from typing import Any

import structlog
from asgi_correlation_id import correlation_id

from app.config import Settings, get_settings

SERVICE_NAME = "joyeria-api"

# Loggers that are too chatty at INFO for a request-per-line service
QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")


def add_request_id(logger, method_name, event_dict):
    """Attach the X-Request-ID of the request being served, if any."""
    request_id = correlation_id.get()
    if request_id:
        event_dict.setdefault("request_id", request_id)
    return event_dict


def service_context(settings: Settings):
    def add_service(logger, method_name, event_dict):
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("env", settings.ENVIRONMENT)
        return event_dict

    return add_service


def build_renderer(settings: Settings):
    if settings.ENVIRONMENT == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structured logging."""
    settings = settings or get_settings()
    level = settings.LOG_LEVEL.upper()

    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_request_id,
        service_context(settings),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    processors: list[Any] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if settings.ENVIRONMENT == "production":
        processors.append(structlog.processors.format_exc_info)
    processors.append(build_renderer(settings))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(foreign_pre_chain=pre_chain, processors=processors))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if level == "DEBUG" else "WARNING")
