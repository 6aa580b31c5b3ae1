"""envscout error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Probe (external process execution)
- 4xxx: Boundary

Detection outcomes are reported as data on status records. These exceptions
cover configuration problems, process execution inside the probe, and the
request/response boundary.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Probe (3xxx)
    PROBE_NOT_FOUND = 3001
    PROBE_TIMEOUT = 3002
    PROBE_FAILED = 3003

    # Boundary (4xxx)
    BOUNDARY_UNKNOWN_CHANNEL = 4001
    BOUNDARY_INVALID_ARGUMENT = 4002


@dataclass(frozen=True, slots=True)
class EnvScoutError(Exception):
    """Base error with a typed code and structured details."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PROBE_TIMEOUT')."""
        return self.code.name

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(EnvScoutError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ProbeError(EnvScoutError):
    """An external command could not be run to completion.

    The only exception family raised by the process probe. Detectors catch it
    and fold it into an unavailable status.
    """

    @property
    def is_not_found(self) -> bool:
        return self.code == ErrorCode.PROBE_NOT_FOUND

    @property
    def is_timeout(self) -> bool:
        return self.code == ErrorCode.PROBE_TIMEOUT

    @classmethod
    def not_found(cls, command: str, reason: str) -> "ProbeError":
        return cls(
            code=ErrorCode.PROBE_NOT_FOUND,
            message=f"Command not found: {command} ({reason})",
            details={"command": command, "reason": reason},
        )

    @classmethod
    def timeout(cls, command: str, timeout_sec: float) -> "ProbeError":
        return cls(
            code=ErrorCode.PROBE_TIMEOUT,
            message=f"Command timed out after {timeout_sec:g}s: {command}",
            retryable=True,
            details={"command": command, "timeout_sec": timeout_sec},
        )

    @classmethod
    def failed(cls, command: str, exit_code: int | None, output: str) -> "ProbeError":
        summary = output.strip() or "no output"
        return cls(
            code=ErrorCode.PROBE_FAILED,
            message=f"Command failed: {command} (exit code {exit_code}): {summary}",
            details={"command": command, "exit_code": exit_code, "output": output},
        )


class BoundaryError(EnvScoutError):
    """Errors raised by request/response boundary handlers."""

    @classmethod
    def unknown_channel(cls, channel: str) -> "BoundaryError":
        return cls(
            code=ErrorCode.BOUNDARY_UNKNOWN_CHANNEL,
            message=f"Unknown channel: {channel}",
            details={"channel": channel},
        )

    @classmethod
    def invalid_argument(cls, name: str, value: Any, reason: str) -> "BoundaryError":
        return cls(
            code=ErrorCode.BOUNDARY_INVALID_ARGUMENT,
            message=f"Invalid argument '{name}': {reason}",
            details={"name": name, "value": str(value), "reason": reason},
        )
