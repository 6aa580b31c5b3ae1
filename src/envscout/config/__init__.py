"""Config module exports."""

from envscout.config.loader import load_config
from envscout.config.models import (
    BunConfig,
    EnvScoutConfig,
    LoggingConfig,
    LogOutputConfig,
    ProbeConfig,
    ShellEnvConfig,
)

__all__ = [
    "load_config",
    "EnvScoutConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ProbeConfig",
    "BunConfig",
    "ShellEnvConfig",
]
