"""Structured logging setup built on structlog."""

import logging
import sys
from contextvars import ContextVar
from typing import Optional

import structlog

_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """Get the request ID bound to the current context, if any."""
    return _request_id.get()


def set_request_id(request_id: Optional[str]) -> None:
    """Bind a request ID to the current context."""
    _request_id.set(request_id)


def _add_request_id(logger, method_name, event_dict):
    """structlog processor that injects the current request ID."""
    request_id = _request_id.get()
    if request_id is not None:
        event_dict.setdefault("request_id", request_id)
    return event_dict


def configure_logging(log_level: str = "INFO", debug: bool = False) -> None:
    """
    Configure structlog and the stdlib root logger.

    Debug mode renders human-readable console output; otherwise each event
    is emitted as a single JSON line.

    Args:
        log_level: Minimum level name (e.g. "INFO", "DEBUG")
        debug: Use the console renderer instead of JSON
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)

    renderer = (
        structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            _add_request_id,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str):
    """Get a structlog logger bound to the given module name."""
    return structlog.get_logger(name)
