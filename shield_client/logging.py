"""Centralised logging configuration using structlog."""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator

import structlog
from structlog import stdlib
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    unbind_contextvars,
)

LOGGER_NAME = "shield_client"

_LOGGING_CONFIGURED = False

# Silent until the host program attaches handlers of its own.
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def _processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.stdlib.filter_by_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(level: int = logging.INFO) -> None:
    """Initialise structlog with a JSON formatter and contextvars support.

    Meant for the host program; the client never calls it on its own.
    """

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    structlog.configure(
        processors=_processors(),
        wrapper_class=stdlib.BoundLogger,
        logger_factory=stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _LOGGING_CONFIGURED = True


def get_logger(name: str | None = None):
    """Return a structlog logger without touching global configuration.

    A host that configured structlog gets its own pipeline. Otherwise events
    are rendered as JSON and handed to the stdlib ``logging`` tree, where the
    host's handlers and levels apply.
    """

    if structlog.is_configured():
        return structlog.get_logger(name)
    return structlog.wrap_logger(
        logging.getLogger(name or LOGGER_NAME),
        processors=_processors(),
        wrapper_class=stdlib.BoundLogger,
    )


@contextmanager
def call_context(**values: Any) -> Iterator[None]:
    """Bind and automatically clean per-call context variables."""

    values = {key: value for key, value in values.items() if value is not None}
    if not values:
        yield
        return
    bind_contextvars(**values)
    try:
        yield
    finally:
        unbind_contextvars(*values.keys())


def reset_context() -> None:
    """Remove all bound context variables."""

    clear_contextvars()


__all__ = ["call_context", "configure_logging", "get_logger", "reset_context"]
