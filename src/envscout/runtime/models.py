"""Serializable status records produced by runtime detection."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Literal

BunSource = Literal["system", "bundled", "vendor"]
WslVersion = Literal[1, 2]
RecommendedShell = Literal["git-bash", "wsl"]


class DetectionReason(Enum):
    """Why a detector reported what it did."""

    TOOL_NOT_FOUND = "tool_not_found"  # absent at every searched location
    TOOL_UNUSABLE = "tool_unusable"  # found, but execution failed or timed out
    VERSION_UNPARSABLE = "version_unparsable"  # available, version left null
    PLATFORM_MISMATCH = "platform_mismatch"  # detector does not apply to this OS
    CONFIGURATION_SKIP = "configuration_skip"  # intentionally not run


def _check_unavailable(status: Any, *nullable: str) -> None:
    if status.available:
        if status.error is not None:
            raise ValueError(f"{type(status).__name__}: available status cannot carry an error")
        return
    if not status.error:
        raise ValueError(f"{type(status).__name__}: unavailable status requires an error")
    for name in nullable:
        if getattr(status, name) is not None:
            raise ValueError(f"{type(status).__name__}: unavailable status must have {name}=None")


def _reason_value(reason: DetectionReason | None) -> str | None:
    return reason.value if reason is not None else None


@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Presence, location and version of one external tool.

    Used for Node.js, Git and Git Bash.
    """

    available: bool
    path: str | None
    version: str | None
    error: str | None
    reason: DetectionReason | None = None

    def __post_init__(self) -> None:
        _check_unavailable(self, "path", "version")

    @classmethod
    def found(cls, path: str, version: str | None) -> ToolStatus:
        reason = None if version is not None else DetectionReason.VERSION_UNPARSABLE
        return cls(available=True, path=path, version=version, error=None, reason=reason)

    @classmethod
    def unavailable(cls, error: str, reason: DetectionReason) -> ToolStatus:
        return cls(available=False, path=None, version=None, error=error, reason=reason)

    @classmethod
    def skipped(cls, tool_name: str) -> ToolStatus:
        return cls.unavailable(f"{tool_name} detection skipped", DetectionReason.CONFIGURATION_SKIP)

    def to_dict(self) -> dict[str, Any]:
        return {
            "available": self.available,
            "path": self.path,
            "version": self.version,
            "error": self.error,
            "reason": _reason_value(self.reason),
        }


@dataclass(frozen=True, slots=True)
class BunStatus:
    """Bun runtime status, including which lookup strategy found it."""

    available: bool
    path: str | None
    version: str | None
    source: BunSource | None
    error: str | None
    reason: DetectionReason | None = None

    def __post_init__(self) -> None:
        _check_unavailable(self, "path", "version", "source")

    @classmethod
    def found(cls, path: str, version: str, source: BunSource) -> BunStatus:
        return cls(available=True, path=path, version=version, source=source, error=None)

    @classmethod
    def unavailable(cls, error: str, reason: DetectionReason) -> BunStatus:
        return cls(
            available=False, path=None, version=None, source=None, error=error, reason=reason
        )

    @classmethod
    def skipped(cls) -> BunStatus:
        return cls.unavailable("Bun detection skipped", DetectionReason.CONFIGURATION_SKIP)

    def to_dict(self) -> dict[str, Any]:
        return {
            "available": self.available,
            "path": self.path,
            "version": self.version,
            "source": self.source,
            "error": self.error,
            "reason": _reason_value(self.reason),
        }


@dataclass(frozen=True, slots=True)
class WslStatus:
    """WSL availability. ``version`` comes from the default distribution only."""

    available: bool
    version: WslVersion | None
    default_distro: str | None
    distros: tuple[str, ...]
    error: str | None
    reason: DetectionReason | None = None

    def __post_init__(self) -> None:
        _check_unavailable(self, "version", "default_distro")
        if not self.available and self.distros:
            raise ValueError("WslStatus: unavailable status must not list distributions")

    @classmethod
    def unavailable(cls, error: str, reason: DetectionReason) -> WslStatus:
        return cls(
            available=False,
            version=None,
            default_distro=None,
            distros=(),
            error=error,
            reason=reason,
        )

    @classmethod
    def skipped(cls) -> WslStatus:
        return cls.unavailable("WSL detection skipped", DetectionReason.CONFIGURATION_SKIP)

    def to_dict(self) -> dict[str, Any]:
        return {
            "available": self.available,
            "version": self.version,
            "default_distro": self.default_distro,
            "distros": list(self.distros),
            "error": self.error,
            "reason": _reason_value(self.reason),
        }


@dataclass(frozen=True, slots=True)
class ShellEnvironmentStatus:
    """POSIX shell environments on Windows and the preferred one."""

    git_bash: ToolStatus
    wsl: WslStatus
    recommended: RecommendedShell | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "git_bash": self.git_bash.to_dict(),
            "wsl": self.wsl.to_dict(),
            "recommended": self.recommended,
        }


@dataclass(frozen=True, slots=True)
class RuntimeStatus:
    """Aggregate snapshot of every detection result.

    ``shell`` is present only on Windows hosts.
    """

    node: ToolStatus
    bun: BunStatus
    git: ToolStatus
    shell: ShellEnvironmentStatus | None
    env_loaded: bool
    initialized_at: float  # Unix timestamp

    def same_detection(self, other: RuntimeStatus) -> bool:
        """True when every field except ``initialized_at`` matches."""
        return all(
            getattr(self, f.name) == getattr(other, f.name)
            for f in fields(self)
            if f.name != "initialized_at"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "node": self.node.to_dict(),
            "bun": self.bun.to_dict(),
            "git": self.git.to_dict(),
            "shell": self.shell.to_dict() if self.shell is not None else None,
            "env_loaded": self.env_loaded,
            "initialized_at": self.initialized_at,
        }


@dataclass(frozen=True, slots=True)
class RuntimeInitOptions:
    """Per-step skip flags. A skipped step reports a fixed "skipped" status."""

    skip_env_load: bool = False
    skip_node_detection: bool = False
    skip_bun_detection: bool = False
    skip_git_detection: bool = False
    skip_shell_detection: bool = False


@dataclass(frozen=True, slots=True)
class ShellEnvResult:
    """Outcome of importing the login-shell environment."""

    success: bool
    loaded_count: int
    error: str | None

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "loaded_count": self.loaded_count, "error": self.error}
