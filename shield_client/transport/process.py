"""Run the validator executable following the stdin/stdout JSON contract."""
from __future__ import annotations

import contextlib
import os
import signal
import subprocess
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..exceptions import LaunchFailureError, TransportFailureError

if TYPE_CHECKING:  # pragma: no cover - typing only
    import asyncio


@dataclass(slots=True, frozen=True)
class ProcessExchange:
    """Everything captured from one finished validator process."""

    stdout: bytes
    stderr: bytes
    returncode: int
    duration: float


def build_command(executable: str | os.PathLike[str], args: Sequence[str]) -> list[str]:
    return [os.fspath(executable), *args]


def kill_process_group(process: subprocess.Popen | asyncio.subprocess.Process) -> None:
    """SIGKILL the validator and every process it started in its session."""

    with contextlib.suppress(ProcessLookupError, PermissionError):
        if hasattr(os, "killpg"):
            os.killpg(process.pid, signal.SIGKILL)
        else:  # pragma: no cover - no process groups on Windows
            process.kill()


def _abandon(process: subprocess.Popen) -> None:
    # Orphans outside the group may still hold the pipes, so never drain them.
    kill_process_group(process)
    for stream in (process.stdin, process.stdout, process.stderr):
        if stream is not None:
            with contextlib.suppress(OSError):
                stream.close()
    process.wait()


@dataclass(slots=True)
class ProcessTransport:
    """Spawn the validator once per call and buffer its whole output.

    A non-zero exit status is reported through :class:`ProcessExchange`
    rather than raised; the caller decides how much it matters.
    """

    executable: str | os.PathLike[str]
    args: Sequence[str] = ()
    timeout: float = 30.0

    @property
    def command(self) -> list[str]:
        return build_command(self.executable, self.args)

    def exchange(self, payload: bytes, *, timeout: float | None = None) -> ProcessExchange:
        """Write *payload* to stdin, close it and wait for the process to exit."""

        limit = self.timeout if timeout is None else timeout
        command = self.command
        started = time.monotonic()
        try:
            process = subprocess.Popen(  # noqa: S603 - caller controlled executable
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=True,
            )
        except (OSError, ValueError) as exc:
            raise LaunchFailureError(f"Unable to start validator '{command[0]}': {exc}") from exc

        try:
            stdout, stderr = process.communicate(input=payload, timeout=limit)
        except subprocess.TimeoutExpired as exc:
            _abandon(process)
            raise TransportFailureError(
                f"Validator did not finish within {limit:g}s and was terminated",
                timed_out=True,
            ) from exc
        except OSError as exc:
            _abandon(process)
            raise TransportFailureError(f"Validator pipe I/O failed: {exc}") from exc

        return ProcessExchange(
            stdout=stdout,
            stderr=stderr,
            returncode=process.returncode,
            duration=time.monotonic() - started,
        )


__all__ = ["ProcessExchange", "ProcessTransport", "build_command", "kill_process_group"]
