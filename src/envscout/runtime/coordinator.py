"""Runtime initialization coordinator.

Owns the single cached ``RuntimeStatus`` for the process:

1. Import the login-shell environment (before any detector reads it)
2. Detect Node.js, Bun and Git concurrently
3. On Windows, detect Git Bash and WSL concurrently, then pick a shell
4. Assemble one status and swap it into the cache in a single assignment

Detection failures are data on the status records. Only unexpected errors
escape ``initialize_runtime``, and they leave the previous cache in place.
"""

from __future__ import annotations

import asyncio
import contextlib
import time
from collections.abc import AsyncIterator, Callable, Coroutine
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from envscout.config.models import EnvScoutConfig
from envscout.core.logging import clear_init_id, set_init_id
from envscout.git.models import GitRepoStatus
from envscout.git.repo_status import get_git_repo_status as _query_git_repo_status
from envscout.runtime.detectors.bun import BunDetector
from envscout.runtime.detectors.git import GitDetector
from envscout.runtime.detectors.git_bash import GitBashDetector
from envscout.runtime.detectors.node import NodeDetector
from envscout.runtime.detectors.wsl import WslDetector
from envscout.runtime.models import (
    BunStatus,
    RuntimeInitOptions,
    RuntimeStatus,
    ShellEnvironmentStatus,
    ShellEnvResult,
    ToolStatus,
    WslStatus,
)
from envscout.runtime.platform import HostPlatform
from envscout.runtime.probe import ProcessProbe
from envscout.runtime.shell import resolve_shell_environment
from envscout.runtime.shell_env import ShellEnvLoader

log = structlog.get_logger()


@dataclass
class Detectors:
    """The detection steps a coordinator runs. Tests substitute fakes."""

    load_shell_env: Callable[[], Coroutine[Any, Any, ShellEnvResult]]
    detect_node: Callable[[], Coroutine[Any, Any, ToolStatus]]
    detect_bun: Callable[[], Coroutine[Any, Any, BunStatus]]
    detect_git: Callable[[], Coroutine[Any, Any, ToolStatus]]
    detect_git_bash: Callable[[], Coroutine[Any, Any, ToolStatus]]
    detect_wsl: Callable[[], Coroutine[Any, Any, WslStatus]]

    @classmethod
    def from_config(
        cls,
        config: EnvScoutConfig,
        *,
        host: HostPlatform,
        probe: ProcessProbe | None = None,
    ) -> Detectors:
        probe = probe or ProcessProbe(timeout_sec=config.probe.timeout_sec)
        return cls(
            load_shell_env=ShellEnvLoader(probe, config.shell_env, host=host).load,
            detect_node=NodeDetector(probe, host=host).detect,
            detect_bun=BunDetector.from_config(probe, config.bun, host=host).detect,
            detect_git=GitDetector(probe, host=host).detect,
            detect_git_bash=GitBashDetector(probe, host=host).detect,
            detect_wsl=WslDetector(
                probe, host=host, timeout_sec=config.probe.wsl_timeout_sec
            ).detect,
        )


@contextlib.asynccontextmanager
async def _first_error() -> AsyncIterator[None]:
    """Re-raise the first failure of a task group as itself.

    The group has already cancelled and awaited the sibling tasks.
    """
    try:
        yield
    except ExceptionGroup as group:
        raise group.exceptions[0] from None


def _summary(status: ToolStatus | BunStatus) -> str:
    if not status.available:
        return f"unavailable: {status.error}"
    version = status.version or "unknown version"
    if isinstance(status, BunStatus):
        return f"{version} ({status.source})"
    return version


class RuntimeCoordinator:
    """Runs detection and holds the cached aggregate status.

    Two states: uninitialized (``status`` is None) and initialized. Once
    initialized, the cache is only ever replaced by a complete new status.
    """

    def __init__(
        self,
        config: EnvScoutConfig | None = None,
        *,
        host: HostPlatform | None = None,
        detectors: Detectors | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config or EnvScoutConfig()
        self._host = host or HostPlatform.current()
        self._detectors = detectors or Detectors.from_config(self._config, host=self._host)
        self._clock = clock
        self._status: RuntimeStatus | None = None

    @property
    def host(self) -> HostPlatform:
        return self._host

    def get_runtime_status(self) -> RuntimeStatus | None:
        """Cached status, or None before the first initialization. Never detects."""
        return self._status

    def is_runtime_initialized(self) -> bool:
        return self._status is not None

    async def initialize_runtime(self, options: RuntimeInitOptions | None = None) -> RuntimeStatus:
        options = options or RuntimeInitOptions()
        started = time.monotonic()
        set_init_id()
        try:
            log.info("runtime_init_started", platform=self._host.os, arch=self._host.arch)
            status = await self._build_status(options)
            self._status = status
            log.info(
                "runtime_init_complete",
                duration_ms=round((time.monotonic() - started) * 1000),
                node=_summary(status.node),
                bun=_summary(status.bun),
                git=_summary(status.git),
                shell=(status.shell.recommended or "none") if status.shell else "n/a",
                env_loaded=status.env_loaded,
            )
            return status
        finally:
            clear_init_id()

    async def reinitialize_runtime(
        self, options: RuntimeInitOptions | None = None
    ) -> RuntimeStatus:
        """Discard the cached detection results and run everything again.

        Readers keep seeing the previous status until the new one is complete.
        """
        log.info("runtime_reinit_requested", had_status=self._status is not None)
        return await self.initialize_runtime(options)

    def get_git_repo_status(self, path: str | Path) -> GitRepoStatus:
        return _query_git_repo_status(path)

    async def _build_status(self, options: RuntimeInitOptions) -> RuntimeStatus:
        env_loaded = False
        if not options.skip_env_load:
            env_result = await self._detectors.load_shell_env()
            env_loaded = env_result.success
            if not env_result.success:
                log.debug("shell_env_not_loaded", reason=env_result.error)

        async with _first_error():
            async with asyncio.TaskGroup() as tg:
                node_task = tg.create_task(self._node(options))
                bun_task = tg.create_task(self._bun(options))
                git_task = tg.create_task(self._git(options))
        node, bun, git = node_task.result(), bun_task.result(), git_task.result()

        shell: ShellEnvironmentStatus | None = None
        if self._host.is_windows:
            shell = await self._shell(options)

        return RuntimeStatus(
            node=node,
            bun=bun,
            git=git,
            shell=shell,
            env_loaded=env_loaded,
            initialized_at=self._clock(),
        )

    async def _node(self, options: RuntimeInitOptions) -> ToolStatus:
        if options.skip_node_detection:
            return ToolStatus.skipped("Node.js")
        return await self._detectors.detect_node()

    async def _bun(self, options: RuntimeInitOptions) -> BunStatus:
        if options.skip_bun_detection:
            return BunStatus.skipped()
        return await self._detectors.detect_bun()

    async def _git(self, options: RuntimeInitOptions) -> ToolStatus:
        if options.skip_git_detection:
            return ToolStatus.skipped("Git")
        return await self._detectors.detect_git()

    async def _shell(self, options: RuntimeInitOptions) -> ShellEnvironmentStatus:
        if options.skip_shell_detection:
            return resolve_shell_environment(ToolStatus.skipped("Git Bash"), WslStatus.skipped())
        async with _first_error():
            async with asyncio.TaskGroup() as tg:
                git_bash_task = tg.create_task(self._detectors.detect_git_bash())
                wsl_task = tg.create_task(self._detectors.detect_wsl())
        return resolve_shell_environment(git_bash_task.result(), wsl_task.result())


# =============================================================================
# Process-wide accessor
# =============================================================================

_default_coordinator: RuntimeCoordinator | None = None


def get_coordinator() -> RuntimeCoordinator:
    """Return the process-wide coordinator, creating it on first use."""
    global _default_coordinator
    if _default_coordinator is None:
        _default_coordinator = RuntimeCoordinator()
    return _default_coordinator


def set_coordinator(coordinator: RuntimeCoordinator | None) -> None:
    """Install a coordinator as the process-wide one (None resets to lazy default)."""
    global _default_coordinator
    _default_coordinator = coordinator


async def initialize_runtime(options: RuntimeInitOptions | None = None) -> RuntimeStatus:
    return await get_coordinator().initialize_runtime(options)


async def reinitialize_runtime(options: RuntimeInitOptions | None = None) -> RuntimeStatus:
    return await get_coordinator().reinitialize_runtime(options)


def get_runtime_status() -> RuntimeStatus | None:
    return get_coordinator().get_runtime_status()


def is_runtime_initialized() -> bool:
    return get_coordinator().is_runtime_initialized()


def get_git_repo_status(path: str | Path) -> GitRepoStatus:
    return get_coordinator().get_git_repo_status(path)
