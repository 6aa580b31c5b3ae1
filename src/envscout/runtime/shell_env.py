"""Import the interactive login-shell environment into this process.

Applications launched from a desktop GUI (Finder, Dock) on macOS do not
inherit what the user's shell rc files export, most importantly ``PATH``.
Without it, tools installed through Homebrew, nvm, volta and friends are
invisible to every detector. The loader runs the login shell once, captures
``env`` and merges the result into ``os.environ`` before detection starts.
"""

from __future__ import annotations

import os
import re
from collections.abc import MutableMapping

import structlog

from envscout.config.models import ShellEnvConfig
from envscout.core.errors import ProbeError
from envscout.runtime.models import ShellEnvResult
from envscout.runtime.platform import HostPlatform
from envscout.runtime.probe import ProcessProbe

log = structlog.get_logger()

ENV_MARKER = "_ENVSCOUT_SHELL_ENV_"

# Per-shell bookkeeping that must not leak into this process
_IGNORED_VARIABLES = frozenset({"_", "SHLVL", "PWD", "OLDPWD"})

_ENTRY_RE = re.compile(r"^(\S+?)=(.*)$")
_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def parse_env_output(output: str) -> dict[str, str]:
    """Parse ``env`` output. Lines without ``NAME=`` continue the previous entry.

    Entries whose name is not an identifier (bash exports functions as
    ``BASH_FUNC_name%%=() { ...``) are dropped together with their
    continuation lines.
    """
    variables: dict[str, str] = {}
    current: str | None = None
    for line in output.splitlines():
        match = _ENTRY_RE.match(line)
        if match:
            name = match.group(1)
            current = name if _NAME_RE.fullmatch(name) else None
            if current is not None:
                variables[current] = match.group(2)
        elif current is not None:
            variables[current] += "\n" + line
    return variables


def extract_marked_output(output: str) -> str | None:
    """Return the text between the two markers, ignoring rc-file chatter around it."""
    start = output.find(ENV_MARKER)
    if start == -1:
        return None
    start += len(ENV_MARKER)
    end = output.find(ENV_MARKER, start)
    if end == -1:
        return None
    return output[start:end]


class ShellEnvLoader:
    def __init__(
        self,
        probe: ProcessProbe,
        config: ShellEnvConfig | None = None,
        *,
        host: HostPlatform | None = None,
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        self._probe = probe
        self._config = config or ShellEnvConfig()
        self._host = host or HostPlatform.current()
        self._environ = environ if environ is not None else os.environ

    def _shell(self) -> str:
        if self._config.shell:
            return self._config.shell
        if shell := self._environ.get("SHELL"):
            return shell
        return "/bin/zsh" if self._host.os == "darwin" else "/bin/sh"

    def command(self) -> list[str]:
        script = f"printf '%s' '{ENV_MARKER}'; command env; printf '%s' '{ENV_MARKER}'"
        return [self._shell(), "-ilc", script]

    async def load(self) -> ShellEnvResult:
        """Merge login-shell variables into the environment. Never raises."""
        if self._host.os not in self._config.platforms:
            return ShellEnvResult(
                success=False,
                loaded_count=0,
                error=f"shell environment loading is not needed on {self._host.os}",
            )

        try:
            result = await self._probe.run(self.command(), timeout_sec=self._config.timeout_sec)
        except ProbeError as e:
            log.warning("shell_env_load_failed", error=e.message)
            return ShellEnvResult(success=False, loaded_count=0, error=e.message)

        marked = extract_marked_output(result.stdout)
        if marked is None:
            error = "login shell output did not contain the environment"
            log.warning("shell_env_load_failed", error=error)
            return ShellEnvResult(success=False, loaded_count=0, error=error)

        loaded = 0
        for name, value in parse_env_output(marked).items():
            if name in _IGNORED_VARIABLES:
                continue
            if self._environ.get(name) != value:
                self._environ[name] = value
                loaded += 1

        log.info("shell_env_loaded", shell=self._shell(), loaded_count=loaded)
        return ShellEnvResult(success=True, loaded_count=loaded, error=None)
