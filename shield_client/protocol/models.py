"""Wire models exchanged with the Shield validator process."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel

API_VERSION = "1.0"

MAX_YIELD_ID_LENGTH = 256
MAX_TRANSACTION_LENGTH = 100 * 1024
MAX_ADDRESS_LENGTH = 128
MAX_IDENTIFIER_LENGTH = 256
MAX_LIST_ITEMS = 100
MAX_REQUEST_BYTES = 100 * 1024

Address = Annotated[str, Field(max_length=MAX_ADDRESS_LENGTH)]
Identifier = Annotated[str, Field(max_length=MAX_IDENTIFIER_LENGTH)]


class Operation(str, Enum):
    """Operations understood by the validator."""

    GET_SUPPORTED_YIELD_IDS = "getSupportedYieldIds"
    IS_SUPPORTED = "isSupported"
    VALIDATE = "validate"


class TronResource(str, Enum):
    BANDWIDTH = "BANDWIDTH"
    ENERGY = "ENERGY"


class ErrorCode(str, Enum):
    """Error codes emitted by the validator itself.

    Responses may carry codes outside this list; :class:`ValidatorError`
    keeps ``code`` as a plain string so newer validators stay readable.
    """

    PARSE_ERROR = "PARSE_ERROR"
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class WireModel(BaseModel):
    """Base model mapping snake_case attributes onto lower camel case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=True,
    )


class ActionArguments(WireModel):
    """Optional action arguments forwarded with a ``validate`` request."""

    model_config = ConfigDict(extra="forbid")

    validator_address: Address | None = None
    validator_addresses: list[Address] | None = Field(default=None, max_length=MAX_LIST_ITEMS)
    amount: str | None = Field(default=None, max_length=78)
    tron_resource: TronResource | None = None
    provider_id: Identifier | None = None
    duration: int | float | None = Field(default=None, ge=0)
    input_token: Address | None = None
    subnet_id: int | float | None = Field(default=None, ge=0)
    fee_configuration_id: Identifier | None = None
    cosmos_pub_key: Identifier | None = None
    tezos_pub_key: Identifier | None = None
    nominator_address: Address | None = None
    nft_ids: list[Identifier] | None = Field(default=None, max_length=MAX_LIST_ITEMS)


class FeeConfiguration(WireModel):
    model_config = ConfigDict(extra="forbid")

    deposit_fee_bps: int | float | None = Field(default=None, ge=0, le=10_000)
    fee_recipient_address: Address | None = None
    allocator_vault_address: Address | None = None


class ValidationContext(WireModel):
    """Extra context the validator uses to check fee-bearing transactions."""

    model_config = ConfigDict(extra="forbid")

    fee_configuration: list[FeeConfiguration] | None = Field(
        default=None, max_length=MAX_LIST_ITEMS
    )


class Request(WireModel):
    """One call to the validator.

    ``None`` stands for an absent field: :meth:`to_wire` drops it instead of
    emitting ``null``.
    """

    model_config = ConfigDict(extra="forbid")

    api_version: str = Field(default=API_VERSION, min_length=1)
    operation: str = Field(min_length=1)
    yield_id: str | None = Field(default=None, min_length=1, max_length=MAX_YIELD_ID_LENGTH)
    unsigned_transaction: str | None = Field(
        default=None, min_length=1, max_length=MAX_TRANSACTION_LENGTH
    )
    user_address: str | None = Field(default=None, min_length=1, max_length=MAX_ADDRESS_LENGTH)
    args: ActionArguments | None = None
    context: ValidationContext | None = None

    def to_wire(self) -> dict[str, Any]:
        """Return the camelCase payload with unset fields omitted."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Result(WireModel):
    """Operation specific payload; each operation fills a different subset."""

    is_valid: StrictBool | None = None
    reason: str | None = None
    detected_type: str | None = None
    details: Any = None
    yield_ids: list[StrictStr] | None = None
    supported: StrictBool | None = None
    yield_id: str | None = None


class ValidatorError(WireModel):
    """Application level failure reported by the validator."""

    code: StrictStr
    message: StrictStr
    details: Any = None


class ResponseMeta(WireModel):
    request_hash: str | None = None


class Response(WireModel):
    """The validator's answer to exactly one request."""

    ok: StrictBool
    api_version: str | None = None
    result: Result | None = None
    error: ValidatorError | None = None
    meta: ResponseMeta | None = None

    @model_validator(mode="after")
    def _check_result_or_error(self) -> "Response":
        if self.ok:
            if self.result is None:
                raise ValueError("'result' is required when 'ok' is true")
            if self.error is not None:
                raise ValueError("'error' must be absent when 'ok' is true")
        else:
            if self.error is None:
                raise ValueError("'error' is required when 'ok' is false")
            if self.result is not None:
                raise ValueError("'result' must be absent when 'ok' is false")
        return self


def describe_validation_error(exc: ValidationError, limit: int = 3) -> str:
    """Condense a pydantic error into a single human readable line."""

    parts = []
    for error in exc.errors(include_url=False)[:limit]:
        location = ".".join(str(item) for item in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    remaining = exc.error_count() - limit
    if remaining > 0:
        parts.append(f"and {remaining} more")
    return "; ".join(parts)


__all__ = [
    "API_VERSION",
    "ActionArguments",
    "ErrorCode",
    "FeeConfiguration",
    "MAX_ADDRESS_LENGTH",
    "MAX_REQUEST_BYTES",
    "MAX_TRANSACTION_LENGTH",
    "MAX_YIELD_ID_LENGTH",
    "Operation",
    "Request",
    "Response",
    "ResponseMeta",
    "Result",
    "TronResource",
    "ValidationContext",
    "ValidatorError",
    "describe_validation_error",
]
