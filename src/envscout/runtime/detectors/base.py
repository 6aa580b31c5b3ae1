"""Shared lookup strategy for single-executable tools.

Node.js, Git and Git Bash are all detected the same way: find the
executable on PATH or at a well-known install location, run its version
flag, and pull the first version-like token out of the output. Only the
search locations differ.
"""

from __future__ import annotations

import os
import re
import shutil
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import ClassVar

import structlog

from envscout.core.errors import ProbeError
from envscout.runtime.models import DetectionReason, ToolStatus
from envscout.runtime.platform import HostPlatform
from envscout.runtime.probe import ProcessProbe

log = structlog.get_logger()

Which = Callable[[str], str | None]

_VERSION_RE = re.compile(r"\d+\.\d+(?:\.\d+)?")

NON_WINDOWS_ERROR = "non-Windows platform"


def extract_version(output: str) -> str | None:
    """Return the first semantic-version-like token in tool output.

    "v20.10.0" -> "20.10.0"; "git version 2.43.0.windows.1" -> "2.43.0"
    """
    match = _VERSION_RE.search(output)
    return match.group(0) if match else None


class ExecutableDetector:
    """Locate one executable and query its version.

    Subclasses set ``tool_name``/``executable`` and provide
    ``default_search_paths``. Tests pass ``search_paths`` and ``which`` to
    keep lookups off the real filesystem.
    """

    tool_name: ClassVar[str]
    executable: ClassVar[str]
    version_args: ClassVar[tuple[str, ...]] = ("--version",)

    def __init__(
        self,
        probe: ProcessProbe,
        *,
        host: HostPlatform | None = None,
        which: Which = shutil.which,
        search_paths: Sequence[Path] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._probe = probe
        self._host = host or HostPlatform.current()
        self._which = which
        self._environ = environ if environ is not None else os.environ
        self._search_paths = list(search_paths) if search_paths is not None else None

    @property
    def host(self) -> HostPlatform:
        return self._host

    def applies_to_host(self) -> bool:
        return True

    def default_search_paths(self) -> list[Path]:
        return []

    def search_paths(self) -> list[Path]:
        if self._search_paths is not None:
            return self._search_paths
        return self.default_search_paths()

    def accept_path_hit(self, path: str) -> bool:  # noqa: ARG002
        """Whether an executable found on PATH should be used."""
        return True

    def locate(self) -> str | None:
        """Find the executable on PATH, then at the standard locations."""
        on_path = self._which(self.executable)
        if on_path and self.accept_path_hit(on_path):
            return on_path
        for candidate in self.search_paths():
            if candidate.is_file():
                return str(candidate)
        return None

    async def detect(self) -> ToolStatus:
        if not self.applies_to_host():
            return ToolStatus.unavailable(NON_WINDOWS_ERROR, DetectionReason.PLATFORM_MISMATCH)

        path = self.locate()
        if path is None:
            log.info("tool_not_found", tool=self.tool_name)
            return ToolStatus.unavailable(
                f"{self.tool_name} not found in PATH or standard install locations",
                DetectionReason.TOOL_NOT_FOUND,
            )

        try:
            result = await self._probe.run([path, *self.version_args])
        except ProbeError as e:
            log.warning(
                "tool_unusable",
                tool=self.tool_name,
                path=path,
                error=e.message,
                timed_out=e.is_timeout,
            )
            return ToolStatus.unavailable(
                f"{self.tool_name} found at {path} but could not be run: {e.message}",
                DetectionReason.TOOL_UNUSABLE,
            )

        version = extract_version(result.stdout) or extract_version(result.stderr)
        if version is None:
            log.info("tool_version_unparsable", tool=self.tool_name, path=path)
        else:
            log.debug("tool_detected", tool=self.tool_name, path=path, version=version)
        return ToolStatus.found(path, version)


def home_dir(environ: Mapping[str, str]) -> Path:
    home = environ.get("HOME") or environ.get("USERPROFILE")
    return Path(home) if home else Path.home()
