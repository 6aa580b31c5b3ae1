"""Host platform identification and bundled-binary metadata.

Binaries shipped with the application are keyed by ``{os}-{arch}``; only five
combinations are supported. ``HostPlatform.current()`` maps the interpreter's
view of the host onto those keys.
"""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from typing import Literal, cast, get_args

Platform = Literal["darwin", "linux", "win32"]
Architecture = Literal["arm64", "x64"]
PlatformArch = Literal[
    "darwin-arm64",
    "darwin-x64",
    "linux-arm64",
    "linux-x64",
    "win32-x64",
]

SUPPORTED_PLATFORM_ARCHES: tuple[PlatformArch, ...] = get_args(PlatformArch)

BUN_VERSION = "1.1.38"
BUN_RELEASE_URL = "https://github.com/oven-sh/bun/releases/download/bun-v{version}/{zip_file_name}"

# Map sys.platform → Platform, platform.machine() → Architecture
_OS_MAP: dict[str, Platform] = {"darwin": "darwin", "linux": "linux", "win32": "win32"}
_ARCH_MAP: dict[str, Architecture] = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
}

# Bun release archives use their own target naming
_BUN_TARGETS: dict[PlatformArch, str] = {
    "darwin-arm64": "darwin-aarch64",
    "darwin-x64": "darwin-x64",
    "linux-arm64": "linux-aarch64",
    "linux-x64": "linux-x64",
    "win32-x64": "windows-x64",
}


@dataclass(frozen=True, slots=True)
class HostPlatform:
    """Operating system and CPU architecture of the running process."""

    os: Platform
    arch: Architecture | None

    @classmethod
    def current(cls) -> HostPlatform:
        os_name = _OS_MAP.get(sys.platform)
        if os_name is None:
            # Other POSIX systems behave like linux for lookup purposes
            os_name = "linux"
        return cls(os=os_name, arch=_ARCH_MAP.get(platform.machine().lower()))

    @property
    def is_windows(self) -> bool:
        return self.os == "win32"

    @property
    def executable_suffix(self) -> str:
        return ".exe" if self.is_windows else ""

    @property
    def platform_arch(self) -> PlatformArch | None:
        """Supported ``{os}-{arch}`` key, or None for unsupported hosts."""
        if self.arch is None:
            return None
        key = f"{self.os}-{self.arch}"
        if key not in SUPPORTED_PLATFORM_ARCHES:
            return None
        return cast(PlatformArch, key)

    def executable_name(self, name: str) -> str:
        return f"{name}{self.executable_suffix}"


@dataclass(frozen=True, slots=True)
class BunDownloadInfo:
    """Release archive and binary names for one supported platform."""

    platform_arch: PlatformArch
    url: str
    zip_file_name: str
    binary_name: str


def get_bun_download_info(
    platform_arch: PlatformArch, version: str = BUN_VERSION
) -> BunDownloadInfo:
    """Static Bun release metadata for a supported platform key."""
    target = _BUN_TARGETS[platform_arch]
    zip_file_name = f"bun-{target}.zip"
    return BunDownloadInfo(
        platform_arch=platform_arch,
        url=BUN_RELEASE_URL.format(version=version, zip_file_name=zip_file_name),
        zip_file_name=zip_file_name,
        binary_name="bun.exe" if platform_arch.startswith("win32") else "bun",
    )
