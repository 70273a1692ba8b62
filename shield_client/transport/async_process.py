"""asyncio flavour of the validator process transport."""
from __future__ import annotations

import asyncio
import contextlib
import os
import time
from collections.abc import Sequence
from dataclasses import dataclass

from ..exceptions import LaunchFailureError, TransportFailureError
from .process import ProcessExchange, build_command, kill_process_group

# How long to wait for the killed group to release its pipes before giving up.
REAP_GRACE_SECONDS = 1.0


@dataclass(slots=True)
class AsyncProcessTransport:
    """Same contract as :class:`ProcessTransport`, awaited as one suspension point."""

    executable: str | os.PathLike[str]
    args: Sequence[str] = ()
    timeout: float = 30.0

    @property
    def command(self) -> list[str]:
        return build_command(self.executable, self.args)

    async def exchange(self, payload: bytes, *, timeout: float | None = None) -> ProcessExchange:
        limit = self.timeout if timeout is None else timeout
        command = self.command
        started = time.monotonic()
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except (OSError, ValueError) as exc:
            raise LaunchFailureError(f"Unable to start validator '{command[0]}': {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(payload), timeout=limit)
        except asyncio.TimeoutError as exc:
            await _terminate(process)
            raise TransportFailureError(
                f"Validator did not finish within {limit:g}s and was terminated",
                timed_out=True,
            ) from exc
        except OSError as exc:
            await _terminate(process)
            raise TransportFailureError(f"Validator pipe I/O failed: {exc}") from exc

        return ProcessExchange(
            stdout=stdout,
            stderr=stderr,
            returncode=process.returncode if process.returncode is not None else -1,
            duration=time.monotonic() - started,
        )


async def _terminate(process: asyncio.subprocess.Process) -> None:
    kill_process_group(process)
    if process.stdin is not None:
        process.stdin.close()
    # wait() also waits for EOF on stdout/stderr, which an orphan outside the
    # group could hold open forever.
    with contextlib.suppress(asyncio.TimeoutError):
        await asyncio.wait_for(process.wait(), timeout=REAP_GRACE_SECONDS)


__all__ = ["AsyncProcessTransport"]
