"""Run one external command with a hard timeout and locale-safe decoding.

Every detector goes through ``ProcessProbe.run``. All low-level failures
(missing binary, permission problems, timeouts, non-zero exits) surface as a
single ``ProbeError`` family, so detectors have exactly one exception type to
fold into a status record.

Output is always decoded as UTF-8. Some Windows consoles default to a legacy
code page, and ``wsl.exe`` writes UTF-16 unless told otherwise; both quirks are
handled here and nowhere else.
"""

from __future__ import annotations

import asyncio
import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import structlog

from envscout.core.errors import ProbeError

log = structlog.get_logger()

DEFAULT_TIMEOUT_SEC = 5.0

# Exit codes a shell uses when the command itself does not exist
_SHELL_NOT_FOUND_CODES = frozenset({127, 9009})

_UTF8_ENV = {
    "PYTHONIOENCODING": "utf-8",
    "WSL_UTF8": "1",
}


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Decoded output of a command that exited successfully."""

    stdout: str
    stderr: str
    exit_code: int


def decode_output(data: bytes) -> str:
    """Decode raw process output as UTF-8 regardless of the host locale."""
    text = data.decode("utf-8", errors="replace")
    # UTF-16 output read as UTF-8 leaves interleaved NULs
    return text.replace("\x00", "").lstrip("\ufeff")


def _display(command: Sequence[str] | str) -> str:
    if isinstance(command, str):
        return command
    return subprocess.list2cmdline(list(command))


class ProcessProbe:
    """Executes external commands for detectors.

    Args:
        timeout_sec: Default hard timeout per command.
        env: Extra environment variables for every child process. The current
             process environment is read at call time, so variables imported
             by the shell environment loader are visible.
    """

    def __init__(
        self,
        *,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._timeout_sec = timeout_sec
        self._extra_env = dict(env or {})

    @property
    def timeout_sec(self) -> float:
        return self._timeout_sec

    def _build_env(self) -> dict[str, str]:
        env = dict(os.environ)
        env.update(_UTF8_ENV)
        env.update(self._extra_env)
        return env

    async def run(
        self,
        command: Sequence[str] | str,
        *,
        timeout_sec: float | None = None,
    ) -> ProbeResult:
        """Run ``command`` and return its decoded output.

        A string command runs through the platform shell; a sequence is
        executed directly.

        Raises:
            ProbeError: The command is missing, timed out, or exited non-zero.
        """
        timeout = timeout_sec if timeout_sec is not None else self._timeout_sec
        display = _display(command)
        env = self._build_env()

        log.debug("probe_start", command=display, timeout_sec=timeout)
        try:
            if isinstance(command, str):
                proc = await asyncio.create_subprocess_shell(
                    command,
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    env=env,
                )
            else:
                proc = await asyncio.create_subprocess_exec(
                    *command,
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    env=env,
                )
        except FileNotFoundError as e:
            raise ProbeError.not_found(display, str(e)) from e
        except OSError as e:
            raise ProbeError.failed(display, None, str(e)) from e

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(proc.communicate(), timeout)
        except TimeoutError:
            await _kill(proc)
            log.warning("probe_timeout", command=display, timeout_sec=timeout)
            raise ProbeError.timeout(display, timeout) from None

        stdout = decode_output(stdout_bytes)
        stderr = decode_output(stderr_bytes)
        exit_code = proc.returncode if proc.returncode is not None else -1

        if exit_code != 0:
            log.debug("probe_failed", command=display, exit_code=exit_code)
            output = stderr.strip() or stdout.strip()
            if isinstance(command, str) and exit_code in _SHELL_NOT_FOUND_CODES:
                raise ProbeError.not_found(display, output or f"exit code {exit_code}")
            raise ProbeError.failed(display, exit_code, output)

        log.debug("probe_done", command=display, exit_code=exit_code)
        return ProbeResult(stdout=stdout, stderr=stderr, exit_code=exit_code)


async def _kill(proc: asyncio.subprocess.Process) -> None:
    try:
        proc.kill()
    except ProcessLookupError:
        return
    await proc.wait()
