"""High level clients that drive one validator process per call."""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Any, Mapping, Protocol

from .config import ShieldSettings, settings as default_settings
from .exceptions import LaunchFailureError, TransportError, TransportFailureError
from .logging import call_context, get_logger
from .protocol.builder import (
    get_supported_yield_ids_request,
    is_supported_request,
    validate_request,
)
from .protocol.codec import decode_response, encode_request, hash_request
from .protocol.models import ActionArguments, Request, ValidationContext
from .protocol.outcomes import (
    Failure,
    LaunchFailure,
    Outcome,
    ProcessFailure,
    ProtocolError,
    TransportFailure,
)
from .transport.async_process import AsyncProcessTransport
from .transport.process import ProcessExchange, ProcessTransport


class Transport(Protocol):
    """Synchronous transport interface used by :class:`ShieldClient`."""

    def exchange(
        self, payload: bytes, *, timeout: float | None = None
    ) -> ProcessExchange:  # pragma: no cover - protocol
        """Run one request/response cycle."""


class AsyncTransport(Protocol):
    """Coroutine transport interface used by :class:`AsyncShieldClient`."""

    async def exchange(
        self, payload: bytes, *, timeout: float | None = None
    ) -> ProcessExchange:  # pragma: no cover - protocol
        """Run one request/response cycle."""


class _BaseClient:
    """Request preparation and outcome classification shared by both clients."""

    def __init__(
        self,
        *,
        settings: ShieldSettings | None,
        api_version: str | None,
        verify_request_hash: bool | None,
    ) -> None:
        self._settings = settings or default_settings
        self.api_version = api_version or self._settings.api_version
        self.verify_request_hash = (
            self._settings.verify_request_hash
            if verify_request_hash is None
            else verify_request_hash
        )
        self._logger = get_logger(__name__)

    def _transport_options(
        self,
        executable: str | os.PathLike[str] | None,
        args: Sequence[str] | None,
        timeout: float | None,
    ) -> dict[str, Any]:
        return {
            "executable": executable or self._settings.validator_path,
            "args": tuple(self._settings.validator_args if args is None else args),
            "timeout": self._settings.timeout_seconds if timeout is None else timeout,
        }

    def _supported_ids_request(self) -> Request:
        return get_supported_yield_ids_request(api_version=self.api_version)

    def _is_supported_request(self, yield_id: str) -> Request:
        return is_supported_request(yield_id, api_version=self.api_version)

    def _validate_request(
        self,
        yield_id: str,
        unsigned_transaction: str,
        user_address: str,
        args: ActionArguments | Mapping[str, Any] | None,
        context: ValidationContext | Mapping[str, Any] | None,
    ) -> Request:
        return validate_request(
            yield_id,
            unsigned_transaction,
            user_address,
            args=args,
            context=context,
            api_version=self.api_version,
        )

    def _transport_failure(self, exc: TransportError, executable: str) -> Failure:
        if isinstance(exc, LaunchFailureError):
            return LaunchFailure(message=str(exc), executable=executable)
        timed_out = isinstance(exc, TransportFailureError) and exc.timed_out
        return TransportFailure(message=str(exc), timed_out=timed_out)

    def _interpret(self, payload: bytes, exchange: ProcessExchange) -> Outcome:
        """Classify captured output; a parseable payload wins over the exit status."""

        outcome = decode_response(
            exchange.stdout,
            request_bytes=payload if self.verify_request_hash else None,
            api_version=self.api_version,
        )
        if exchange.returncode == 0:
            return outcome
        if isinstance(outcome, ProtocolError):
            return ProcessFailure(
                message=(
                    f"Validator exited with status {exchange.returncode}: "
                    f"{outcome.description}"
                ),
                exit_status=exchange.returncode,
                stderr=exchange.stderr.decode("utf-8", errors="replace").strip(),
            )
        self._logger.warning(
            "shield.process.nonzero_exit",
            exit_status=exchange.returncode,
            outcome=outcome.__class__.__name__,
        )
        return outcome

    def _log_outcome(self, outcome: Outcome, duration: float | None = None) -> None:
        if outcome.ok:
            self._logger.info("shield.call.completed", duration=duration)
            return
        self._logger.warning(
            "shield.call.failed",
            kind=outcome.kind.value,  # type: ignore[union-attr]
            error=outcome.message,  # type: ignore[union-attr]
            duration=duration,
        )


class ShieldClient(_BaseClient):
    """Ask a local Shield validator binary about yields and unsigned transactions.

    Every call spawns a fresh process; the client itself only holds
    configuration and can be shared between threads.
    """

    def __init__(
        self,
        executable: str | os.PathLike[str] | None = None,
        *,
        args: Sequence[str] | None = None,
        timeout: float | None = None,
        settings: ShieldSettings | None = None,
        transport: Transport | None = None,
        api_version: str | None = None,
        verify_request_hash: bool | None = None,
    ) -> None:
        super().__init__(
            settings=settings,
            api_version=api_version,
            verify_request_hash=verify_request_hash,
        )
        self._transport: Transport = transport or ProcessTransport(
            **self._transport_options(executable, args, timeout)
        )

    def get_supported_yield_ids(self, *, timeout: float | None = None) -> Outcome:
        """Return the yield identifiers the validator knows about."""

        return self.call(self._supported_ids_request(), timeout=timeout)

    def is_supported(self, yield_id: str, *, timeout: float | None = None) -> Outcome:
        return self.call(self._is_supported_request(yield_id), timeout=timeout)

    def validate(
        self,
        yield_id: str,
        unsigned_transaction: str,
        user_address: str,
        *,
        args: ActionArguments | Mapping[str, Any] | None = None,
        context: ValidationContext | Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Outcome:
        """Check *unsigned_transaction* against the validator's policy for *yield_id*.

        Raises :class:`InvalidRequestError` before spawning anything when a
        required argument is missing or empty.
        """

        request = self._validate_request(
            yield_id, unsigned_transaction, user_address, args, context
        )
        return self.call(request, timeout=timeout)

    def call(self, request: Request, *, timeout: float | None = None) -> Outcome:
        """Send an already built *request* and classify the answer."""

        payload = encode_request(request)
        with call_context(
            operation=request.operation,
            yield_id=request.yield_id,
            request_hash=hash_request(payload),
        ):
            self._logger.info("shield.call.start", request_bytes=len(payload))
            try:
                exchange = self._transport.exchange(payload, timeout=timeout)
            except TransportError as exc:
                outcome: Outcome = self._transport_failure(
                    exc, str(getattr(self._transport, "executable", ""))
                )
                self._log_outcome(outcome)
                return outcome
            outcome = self._interpret(payload, exchange)
            self._log_outcome(outcome, exchange.duration)
            return outcome


class AsyncShieldClient(_BaseClient):
    """asyncio counterpart of :class:`ShieldClient`."""

    def __init__(
        self,
        executable: str | os.PathLike[str] | None = None,
        *,
        args: Sequence[str] | None = None,
        timeout: float | None = None,
        settings: ShieldSettings | None = None,
        transport: AsyncTransport | None = None,
        api_version: str | None = None,
        verify_request_hash: bool | None = None,
    ) -> None:
        super().__init__(
            settings=settings,
            api_version=api_version,
            verify_request_hash=verify_request_hash,
        )
        self._transport: AsyncTransport = transport or AsyncProcessTransport(
            **self._transport_options(executable, args, timeout)
        )

    async def get_supported_yield_ids(self, *, timeout: float | None = None) -> Outcome:
        return await self.call(self._supported_ids_request(), timeout=timeout)

    async def is_supported(self, yield_id: str, *, timeout: float | None = None) -> Outcome:
        return await self.call(self._is_supported_request(yield_id), timeout=timeout)

    async def validate(
        self,
        yield_id: str,
        unsigned_transaction: str,
        user_address: str,
        *,
        args: ActionArguments | Mapping[str, Any] | None = None,
        context: ValidationContext | Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Outcome:
        request = self._validate_request(
            yield_id, unsigned_transaction, user_address, args, context
        )
        return await self.call(request, timeout=timeout)

    async def call(self, request: Request, *, timeout: float | None = None) -> Outcome:
        payload = encode_request(request)
        with call_context(
            operation=request.operation,
            yield_id=request.yield_id,
            request_hash=hash_request(payload),
        ):
            self._logger.info("shield.call.start", request_bytes=len(payload))
            try:
                exchange = await self._transport.exchange(payload, timeout=timeout)
            except TransportError as exc:
                outcome: Outcome = self._transport_failure(
                    exc, str(getattr(self._transport, "executable", ""))
                )
                self._log_outcome(outcome)
                return outcome
            outcome = self._interpret(payload, exchange)
            self._log_outcome(outcome, exchange.duration)
            return outcome


__all__ = ["AsyncShieldClient", "AsyncTransport", "ShieldClient", "Transport"]
