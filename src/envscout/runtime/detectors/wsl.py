"""WSL (Windows Subsystem for Linux) detection.

Runs ``wsl.exe --list --verbose`` behind a ``chcp 65001`` code-page switch and
parses its table:

      NAME            STATE           VERSION
    * Ubuntu          Running         2
      Debian          Stopped         1

The ``*`` marks the default distribution. Only the default row's VERSION
column is reported as the WSL version; other rows contribute their names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

import structlog

from envscout.core.errors import ProbeError
from envscout.runtime.detectors.base import NON_WINDOWS_ERROR
from envscout.runtime.models import DetectionReason, WslStatus, WslVersion
from envscout.runtime.platform import HostPlatform
from envscout.runtime.probe import ProcessProbe

log = structlog.get_logger()

WSL_LIST_COMMAND = "chcp 65001 > nul && wsl.exe --list --verbose"
DEFAULT_WSL_TIMEOUT_SEC = 10.0

NO_DISTRIBUTION_ERROR = "WSL is installed but no Linux distribution is installed"
NOT_INSTALLED_ERROR = "WSL is not installed"

# Case-sensitive substring match: a distro name containing one of these is
# dropped along with the header
_HEADER_TOKENS = ("NAME", "STATE", "VERSION")
_DEFAULT_MARKER = re.compile(r"^\*\s*")
_VERSIONS: dict[str, WslVersion] = {"1": 1, "2": 2}

WslErrorKind = Literal["not_installed", "no_distribution", "failed"]


@dataclass(frozen=True, slots=True)
class WslListing:
    """Parsed ``wsl.exe --list --verbose`` output."""

    version: WslVersion | None
    default_distro: str | None
    distros: tuple[str, ...]


def parse_wsl_list_output(output: str) -> WslListing:
    lines = [line.strip() for line in output.splitlines()]
    rows = [
        line for line in lines if line and not any(token in line for token in _HEADER_TOKENS)
    ]

    distros: list[str] = []
    default_distro: str | None = None
    version: WslVersion | None = None

    for row in rows:
        is_default = row.startswith("*")
        parts = _DEFAULT_MARKER.sub("", row).split()
        if len(parts) < 3:
            continue

        name, version_marker = parts[0], parts[-1]
        distros.append(name)
        if is_default:
            default_distro = name
            version = _VERSIONS.get(version_marker)

    return WslListing(version=version, default_distro=default_distro, distros=tuple(distros))


def classify_wsl_error(message: str) -> WslErrorKind:
    """Classify a failed WSL listing from its error text.

    Substring matching on tool output is brittle across WSL releases and
    locales; anything unrecognised is a generic failure.
    """
    lowered = message.lower()
    if "wsl.exe" in lowered and ("not found" in lowered or "not recognized" in lowered):
        return "not_installed"
    if "no installed distributions" in lowered:
        return "no_distribution"
    return "failed"


def status_from_listing(listing: WslListing) -> WslStatus:
    if not listing.distros:
        return WslStatus.unavailable(NO_DISTRIBUTION_ERROR, DetectionReason.TOOL_UNUSABLE)
    return WslStatus(
        available=True,
        version=listing.version,
        default_distro=listing.default_distro,
        distros=listing.distros,
        error=None,
    )


def status_from_error(error: ProbeError) -> WslStatus:
    kind: WslErrorKind = (
        "not_installed" if error.is_not_found else classify_wsl_error(error.message)
    )
    if kind == "not_installed":
        return WslStatus.unavailable(NOT_INSTALLED_ERROR, DetectionReason.TOOL_NOT_FOUND)
    if kind == "no_distribution":
        return WslStatus.unavailable(NO_DISTRIBUTION_ERROR, DetectionReason.TOOL_UNUSABLE)
    return WslStatus.unavailable(
        f"WSL detection failed: {error.message}", DetectionReason.TOOL_UNUSABLE
    )


class WslDetector:
    def __init__(
        self,
        probe: ProcessProbe,
        *,
        host: HostPlatform | None = None,
        timeout_sec: float = DEFAULT_WSL_TIMEOUT_SEC,
    ) -> None:
        self._probe = probe
        self._host = host or HostPlatform.current()
        self._timeout_sec = timeout_sec

    async def detect(self) -> WslStatus:
        if not self._host.is_windows:
            return WslStatus.unavailable(NON_WINDOWS_ERROR, DetectionReason.PLATFORM_MISMATCH)

        try:
            result = await self._probe.run(WSL_LIST_COMMAND, timeout_sec=self._timeout_sec)
        except ProbeError as e:
            status = status_from_error(e)
            log.warning("wsl_unavailable", error=status.error)
            return status

        status = status_from_listing(parse_wsl_list_output(result.stdout))
        if status.available:
            log.debug(
                "wsl_detected",
                version=status.version,
                default_distro=status.default_distro,
                distros=list(status.distros),
            )
        else:
            log.warning("wsl_no_distribution")
        return status
