"""Core module exports."""

from envscout.core.errors import (
    BoundaryError,
    ConfigError,
    EnvScoutError,
    ErrorCode,
    ProbeError,
)
from envscout.core.logging import (
    clear_init_id,
    configure_logging,
    get_init_id,
    set_init_id,
)

__all__ = [
    # Errors
    "EnvScoutError",
    "ErrorCode",
    "ConfigError",
    "ProbeError",
    "BoundaryError",
    # Logging
    "clear_init_id",
    "configure_logging",
    "get_init_id",
    "set_init_id",
]
