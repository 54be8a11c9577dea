"""Logging configuration using structlog."""

import logging
import sys

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from dexcache.config.settings import Settings, get_settings

# Third-party loggers that log every request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "redis")


def _service_context(settings: Settings) -> Processor:
    """Build a processor stamping every event with the service identity."""

    def add_service(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", settings.app_name)
        event_dict.setdefault("version", settings.app_version)
        return event_dict

    return add_service


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and stdlib logging for the gateway.

    Debug mode renders colored console output with tracebacks inline;
    otherwise every event is one JSON line with exception info formatted
    as a string field.
    """
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level)

    renderer: list[Processor] = (
        [structlog.dev.ConsoleRenderer()]
        if settings.debug
        else [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            _service_context(settings),
            *renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    if not settings.debug:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
