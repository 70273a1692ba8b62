"""Discriminated outcomes returned by every validator call."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, NoReturn, Union

from ..exceptions import ShieldCallError
from .models import Result, ValidatorError


class FailureKind(str, Enum):
    """Classifies why a call did not produce a :class:`Success`."""

    LAUNCH_FAILURE = "LaunchFailure"
    TRANSPORT_FAILURE = "TransportFailure"
    PROCESS_FAILURE = "ProcessFailure"
    PROTOCOL_ERROR = "ProtocolError"
    APPLICATION_ERROR = "ApplicationError"


@dataclass(slots=True, frozen=True)
class Success:
    """The validator answered ``ok: true``."""

    ok: ClassVar[bool] = True

    result: Result
    request_hash: str | None = None

    def unwrap(self) -> Result:
        return self.result


class Failure:
    """Common surface of every unsuccessful outcome.

    Subclasses expose ``kind`` and a human readable ``message``.
    """

    __slots__ = ()

    ok: ClassVar[bool] = False
    kind: ClassVar[FailureKind]

    def unwrap(self) -> NoReturn:
        """Raise :class:`ShieldCallError` carrying this failure."""

        raise ShieldCallError(self)  # type: ignore[arg-type]


@dataclass(slots=True, frozen=True)
class ApplicationError(Failure):
    """The validator answered ``ok: false`` with a structured error."""

    kind: ClassVar[FailureKind] = FailureKind.APPLICATION_ERROR

    error: ValidatorError

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def details(self) -> Any:
        return self.error.details


@dataclass(slots=True, frozen=True)
class ProtocolError(Failure):
    """The captured output did not conform to the response schema."""

    kind: ClassVar[FailureKind] = FailureKind.PROTOCOL_ERROR

    description: str
    raw_output: bytes = b""

    @property
    def message(self) -> str:
        return self.description


@dataclass(slots=True, frozen=True)
class LaunchFailure(Failure):
    """The validator executable could not be found or started."""

    kind: ClassVar[FailureKind] = FailureKind.LAUNCH_FAILURE

    message: str
    executable: str = ""


@dataclass(slots=True, frozen=True)
class TransportFailure(Failure):
    """Pipe I/O failed or the call exceeded its timeout."""

    kind: ClassVar[FailureKind] = FailureKind.TRANSPORT_FAILURE

    message: str
    timed_out: bool = False


@dataclass(slots=True, frozen=True)
class ProcessFailure(Failure):
    """The validator exited abnormally without a parseable response."""

    kind: ClassVar[FailureKind] = FailureKind.PROCESS_FAILURE

    message: str
    exit_status: int
    stderr: str = ""


Outcome = Union[
    Success,
    ApplicationError,
    ProtocolError,
    LaunchFailure,
    TransportFailure,
    ProcessFailure,
]


__all__ = [
    "ApplicationError",
    "Failure",
    "FailureKind",
    "LaunchFailure",
    "Outcome",
    "ProcessFailure",
    "ProtocolError",
    "Success",
    "TransportFailure",
]
