"""Transports that carry one request/response cycle to the validator process."""

from .async_process import AsyncProcessTransport
from .process import ProcessExchange, ProcessTransport

__all__ = ["AsyncProcessTransport", "ProcessExchange", "ProcessTransport"]
