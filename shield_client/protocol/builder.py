"""Build requests that are consistent with the chosen operation."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from ..exceptions import InvalidRequestError
from .codec import encode_request
from .models import (
    API_VERSION,
    MAX_REQUEST_BYTES,
    ActionArguments,
    Operation,
    Request,
    ValidationContext,
    describe_validation_error,
)

_REQUIRED_FIELDS: dict[Operation, tuple[str, ...]] = {
    Operation.GET_SUPPORTED_YIELD_IDS: (),
    Operation.IS_SUPPORTED: ("yield_id",),
    Operation.VALIDATE: ("yield_id", "unsigned_transaction", "user_address"),
}

_OPTIONAL_FIELDS: dict[Operation, tuple[str, ...]] = {
    Operation.GET_SUPPORTED_YIELD_IDS: (),
    Operation.IS_SUPPORTED: (),
    Operation.VALIDATE: ("args", "context"),
}


def build_request(
    operation: Operation | str,
    *,
    api_version: str = API_VERSION,
    **params: Any,
) -> Request:
    """Return a :class:`Request` for *operation* or raise :class:`InvalidRequestError`.

    ``None`` parameters count as not supplied. Known operations reject
    missing, empty and unexpected fields; unknown operations are passed
    through for the validator to judge.
    """

    name = operation.value if isinstance(operation, Operation) else str(operation)
    if not name:
        raise InvalidRequestError(name, "operation must not be empty")
    supplied = {key: value for key, value in params.items() if value is not None}

    known = _known_operation(name)
    if known is not None:
        required = _REQUIRED_FIELDS[known]
        unexpected = sorted(set(supplied) - set(required) - set(_OPTIONAL_FIELDS[known]))
        if unexpected:
            fields = ", ".join(f"'{to_camel(field)}'" for field in unexpected)
            raise InvalidRequestError(name, f"unexpected field(s) {fields}")
        for field in required:
            value = supplied.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise InvalidRequestError(name, f"field '{to_camel(field)}' is required")

    try:
        request = Request(api_version=api_version, operation=name, **supplied)
    except ValidationError as exc:
        raise InvalidRequestError(name, describe_validation_error(exc)) from exc

    size = len(encode_request(request))
    if size > MAX_REQUEST_BYTES:
        raise InvalidRequestError(
            name, f"serialized request is {size} bytes, limit is {MAX_REQUEST_BYTES}"
        )
    return request


def get_supported_yield_ids_request(*, api_version: str = API_VERSION) -> Request:
    return build_request(Operation.GET_SUPPORTED_YIELD_IDS, api_version=api_version)


def is_supported_request(yield_id: str, *, api_version: str = API_VERSION) -> Request:
    return build_request(Operation.IS_SUPPORTED, api_version=api_version, yield_id=yield_id)


def validate_request(
    yield_id: str,
    unsigned_transaction: str,
    user_address: str,
    *,
    args: ActionArguments | Mapping[str, Any] | None = None,
    context: ValidationContext | Mapping[str, Any] | None = None,
    api_version: str = API_VERSION,
) -> Request:
    """Build a ``validate`` request for an unsigned transaction."""

    return build_request(
        Operation.VALIDATE,
        api_version=api_version,
        yield_id=yield_id,
        unsigned_transaction=unsigned_transaction,
        user_address=user_address,
        args=args,
        context=context,
    )


def _known_operation(name: str) -> Operation | None:
    try:
        return Operation(name)
    except ValueError:
        return None


__all__ = [
    "build_request",
    "get_supported_yield_ids_request",
    "is_supported_request",
    "validate_request",
]
