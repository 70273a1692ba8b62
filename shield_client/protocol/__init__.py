"""Message schema, request builder and response codec for the validator protocol."""

from .builder import (
    build_request,
    get_supported_yield_ids_request,
    is_supported_request,
    validate_request,
)
from .codec import decode_response, encode_request, hash_request
from .models import (
    API_VERSION,
    ActionArguments,
    ErrorCode,
    FeeConfiguration,
    Operation,
    Request,
    Response,
    Result,
    TronResource,
    ValidationContext,
    ValidatorError,
)
from .outcomes import (
    ApplicationError,
    Failure,
    FailureKind,
    LaunchFailure,
    Outcome,
    ProcessFailure,
    ProtocolError,
    Success,
    TransportFailure,
)

__all__ = [
    "API_VERSION",
    "ActionArguments",
    "ApplicationError",
    "ErrorCode",
    "Failure",
    "FailureKind",
    "FeeConfiguration",
    "LaunchFailure",
    "Operation",
    "Outcome",
    "ProcessFailure",
    "ProtocolError",
    "Request",
    "Response",
    "Result",
    "Success",
    "TransportFailure",
    "TronResource",
    "ValidationContext",
    "ValidatorError",
    "build_request",
    "decode_response",
    "encode_request",
    "get_supported_yield_ids_request",
    "hash_request",
    "is_supported_request",
    "validate_request",
]
