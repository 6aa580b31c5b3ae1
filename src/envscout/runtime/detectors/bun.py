"""Bun detection across three ordered lookup strategies.

1. system  - a user-managed install on PATH (or ~/.bun/bin)
2. bundled - the binary shipped inside the packaged application
3. vendor  - a development checkout's vendor directory

The first strategy yielding a binary that runs and reports a version wins.
System comes first so a user's own install is never shadowed.
"""

from __future__ import annotations

import os
import shutil
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

import structlog

from envscout.config.models import BunConfig
from envscout.core.errors import ProbeError
from envscout.runtime.detectors.base import Which, extract_version, home_dir
from envscout.runtime.models import BunSource, BunStatus, DetectionReason
from envscout.runtime.platform import HostPlatform, get_bun_download_info
from envscout.runtime.probe import ProcessProbe

log = structlog.get_logger()


def is_frozen() -> bool:
    """True when running from a packaged (frozen) application."""
    return bool(getattr(sys, "frozen", False))


@dataclass(frozen=True, slots=True)
class _Attempt:
    source: BunSource
    path: str | None
    failure: str | None
    found_binary: bool = False


class BunDetector:
    """Find a runnable Bun binary and record which strategy produced it."""

    def __init__(
        self,
        probe: ProcessProbe,
        *,
        host: HostPlatform | None = None,
        which: Which = shutil.which,
        resources_dir: Path | None = None,
        vendor_dir: Path | None = None,
        frozen: bool | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._probe = probe
        self._host = host or HostPlatform.current()
        self._which = which
        self._resources_dir = resources_dir
        self._vendor_dir = vendor_dir
        self._frozen = is_frozen() if frozen is None else frozen
        self._environ = environ if environ is not None else os.environ

    @classmethod
    def from_config(
        cls,
        probe: ProcessProbe,
        config: BunConfig,
        *,
        host: HostPlatform | None = None,
    ) -> BunDetector:
        frozen = is_frozen()
        if config.resources_dir:
            resources_dir: Path | None = Path(config.resources_dir).expanduser()
        elif frozen:
            resources_dir = Path(sys.executable).resolve().parent / "resources"
        else:
            resources_dir = None
        if config.vendor_dir:
            vendor_dir = Path(config.vendor_dir).expanduser()
        else:
            vendor_dir = Path.cwd() / "vendor"
        return cls(
            probe,
            host=host,
            resources_dir=resources_dir,
            vendor_dir=vendor_dir,
            frozen=frozen,
        )

    async def detect(self) -> BunStatus:
        strategies: list[tuple[BunSource, Callable[[], tuple[str | None, str | None]]]] = [
            ("system", self._locate_system),
            ("bundled", self._locate_bundled),
            ("vendor", self._locate_vendor),
        ]

        attempts: list[_Attempt] = []
        for source, locate in strategies:
            path, miss = locate()
            if path is None:
                attempts.append(_Attempt(source=source, path=None, failure=miss))
                continue

            version, failure = await self._query_version(path)
            if version is not None:
                log.debug("bun_detected", source=source, path=path, version=version)
                return BunStatus.found(path, version, source)

            log.warning("bun_candidate_rejected", source=source, path=path, error=failure)
            attempts.append(_Attempt(source=source, path=path, failure=failure, found_binary=True))

        summary = "; ".join(f"{a.source}: {a.failure}" for a in attempts)
        reason = (
            DetectionReason.TOOL_UNUSABLE
            if any(a.found_binary for a in attempts)
            else DetectionReason.TOOL_NOT_FOUND
        )
        log.info("bun_not_found", attempts=summary)
        return BunStatus.unavailable(f"Bun not found ({summary})", reason)

    async def _query_version(self, path: str) -> tuple[str | None, str | None]:
        try:
            result = await self._probe.run([path, "--version"])
        except ProbeError as e:
            return None, f"{path} could not be run: {e.message}"
        version = extract_version(result.stdout)
        if version is None:
            return None, f"{path} reported no version"
        return version, None

    def _locate_system(self) -> tuple[str | None, str | None]:
        on_path = self._which("bun")
        if on_path:
            return on_path, None
        user_install = home_dir(self._environ) / ".bun" / "bin" / self._host.executable_name("bun")
        if user_install.is_file():
            return str(user_install), None
        return None, "not found in PATH"

    def _platform_binary(self, root: Path) -> tuple[str | None, str | None]:
        platform_arch = self._host.platform_arch
        if platform_arch is None:
            return None, f"unsupported platform {self._host.os}-{self._host.arch or 'unknown'}"
        info = get_bun_download_info(platform_arch)
        candidate = root / "bun" / platform_arch / info.binary_name
        if not candidate.is_file():
            return None, f"{candidate} does not exist"
        return str(candidate), None

    def _locate_bundled(self) -> tuple[str | None, str | None]:
        if self._resources_dir is None:
            return None, "no bundled resources directory"
        return self._platform_binary(self._resources_dir)

    def _locate_vendor(self) -> tuple[str | None, str | None]:
        if self._frozen:
            return None, "vendor directory is not used by packaged builds"
        if self._vendor_dir is None:
            return None, "no vendor directory"
        return self._platform_binary(self._vendor_dir)
