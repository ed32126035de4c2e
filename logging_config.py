"""Structured logging for the store, the ledger and the API."""
import logging
import sys
from typing import Any, Optional

import structlog
from config import Settings, get_settings

# Libraries that are noisy at INFO
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "sqlalchemy.pool", "httpx")


def _add_app_env(settings: Settings):
    def processor(logger, method_name, event_dict):
        event_dict.setdefault("app_env", settings.app_env)
        return event_dict
    return processor


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structlog on top of the standard logging module.

    Production emits one JSON object per line; every other environment gets
    the console renderer, without colors under test.

    Args:
        settings: Settings to configure from (default: get_settings())
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_app_env(settings),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.is_production:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=not settings.is_testing),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger for a module; pass __name__."""
    return structlog.get_logger(name)


def bind_context(**context: Any) -> None:
    """
    Attach fields to every log line emitted from the current context.

    The API binds the request id here so store and ledger logs carry it.
    """
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    """Drop everything bound with bind_context."""
    structlog.contextvars.clear_contextvars()
