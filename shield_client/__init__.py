"""Client for the Shield transaction validator's stdin/stdout JSON interface."""

from .client import AsyncShieldClient, ShieldClient
from .config import ShieldSettings, settings
from .exceptions import (
    InvalidRequestError,
    LaunchFailureError,
    ShieldCallError,
    ShieldClientError,
    TransportError,
    TransportFailureError,
)
from .protocol import (
    ApplicationError,
    FailureKind,
    LaunchFailure,
    Operation,
    Outcome,
    ProcessFailure,
    ProtocolError,
    Request,
    Result,
    Success,
    TransportFailure,
    ValidatorError,
)

__all__ = [
    "ApplicationError",
    "AsyncShieldClient",
    "FailureKind",
    "InvalidRequestError",
    "LaunchFailure",
    "LaunchFailureError",
    "Operation",
    "Outcome",
    "ProcessFailure",
    "ProtocolError",
    "Request",
    "Result",
    "ShieldCallError",
    "ShieldClient",
    "ShieldClientError",
    "ShieldSettings",
    "Success",
    "TransportError",
    "TransportFailure",
    "TransportFailureError",
    "ValidatorError",
    "settings",
]
