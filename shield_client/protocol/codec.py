"""Serialise requests and classify the validator's captured output."""

from __future__ import annotations

import hashlib
import string

from pydantic import ValidationError

from .models import Request, Response, describe_validation_error
from .outcomes import ApplicationError, Outcome, ProtocolError, Success


def encode_request(request: Request) -> bytes:
    """Return the exact UTF-8 bytes written to the validator's stdin."""

    return request.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def hash_request(payload: bytes) -> str:
    """Hex SHA-256 digest the validator echoes back as ``meta.requestHash``."""

    return hashlib.sha256(payload).hexdigest()


def decode_response(
    raw: bytes,
    *,
    request_bytes: bytes | None = None,
    api_version: str | None = None,
) -> Outcome:
    """Parse *raw* stdout into :class:`Success`, :class:`ApplicationError` or
    :class:`ProtocolError`.

    Never raises for malformed input. When *request_bytes* is given and the
    response carries ``meta.requestHash`` the two must agree; when
    *api_version* is given and the response echoes one, they must agree too.
    """

    if not raw.strip():
        return ProtocolError("validator produced no output", raw_output=raw)
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        return ProtocolError(f"response is not valid UTF-8: {exc}", raw_output=raw)

    try:
        response = Response.model_validate_json(text.strip())
    except ValidationError as exc:
        return ProtocolError(
            f"malformed response: {describe_validation_error(exc)}", raw_output=raw
        )

    if api_version is not None and response.api_version not in (None, api_version):
        return ProtocolError(
            f"api version mismatch: sent '{api_version}', received '{response.api_version}'",
            raw_output=raw,
        )

    request_hash = response.meta.request_hash if response.meta else None
    # Validators that crash before reading stdin report a placeholder hash.
    if request_bytes is not None and _is_digest(request_hash):
        if request_hash.lower() != hash_request(request_bytes):  # type: ignore[union-attr]
            return ProtocolError(
                "request hash mismatch: response does not belong to this request",
                raw_output=raw,
            )

    if response.ok:
        return Success(result=response.result, request_hash=request_hash)  # type: ignore[arg-type]
    return ApplicationError(error=response.error)  # type: ignore[arg-type]


def _is_digest(value: str | None) -> bool:
    if value is None or len(value) != 64:
        return False
    return all(char in string.hexdigits for char in value)


__all__ = ["decode_response", "encode_request", "hash_request"]
