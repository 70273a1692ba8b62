"""Custom exceptions for the Shield validator client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .protocol.outcomes import Failure


class ShieldClientError(RuntimeError):
    """Base exception raised by the Shield client."""


class InvalidRequestError(ShieldClientError):
    """Raised when a request cannot be built for the chosen operation."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"Invalid '{operation}' request: {message}")
        self.operation = operation
        self.detail = message


class TransportError(ShieldClientError):
    """Raised when the validator process cannot be run or talked to."""


class LaunchFailureError(TransportError):
    """Raised when the validator executable cannot be found or started."""


class TransportFailureError(TransportError):
    """Raised when the pipes fail or the validator exceeds its timeout."""

    def __init__(self, message: str, *, timed_out: bool = False) -> None:
        super().__init__(message)
        self.timed_out = timed_out


class ShieldCallError(ShieldClientError):
    """Raised by :meth:`Outcome.unwrap` when a call did not succeed."""

    def __init__(self, failure: "Failure") -> None:
        super().__init__(f"{failure.kind.value}: {failure.message}")
        self.failure = failure


__all__ = [
    "InvalidRequestError",
    "LaunchFailureError",
    "ShieldCallError",
    "ShieldClientError",
    "TransportError",
    "TransportFailureError",
]
