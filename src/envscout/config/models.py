"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (ENVSCOUT__SECTION__KEY)
3. YAML config file (~/.config/envscout/config.yaml or an explicit path)
4. Built-in defaults (this file)

Environment Variable Format:
    ENVSCOUT__<SECTION>__<KEY>=<VALUE>

Examples:
    ENVSCOUT__LOGGING__LEVEL=DEBUG
    ENVSCOUT__PROBE__TIMEOUT_SEC=8
    ENVSCOUT__BUN__RESOURCES_DIR=/Applications/App.app/Contents/Resources
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
ShellEnvPlatform = Literal["darwin", "linux", "win32"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        ENVSCOUT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG includes every probe invocation.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ProbeConfig(BaseModel):
    """External process probe configuration.

    Env vars:
        ENVSCOUT__PROBE__TIMEOUT_SEC: Timeout for version queries
        ENVSCOUT__PROBE__WSL_TIMEOUT_SEC: Timeout for the WSL distribution listing
    """

    timeout_sec: float = Field(
        default=5.0,
        description="Hard timeout for each version query. A hung tool is abandoned "
        "at this boundary and reported as unusable.",
    )
    wsl_timeout_sec: float = Field(
        default=10.0,
        description="Timeout for the WSL listing. The first call may start the WSL "
        "service, which is slow.",
    )

    @field_validator("timeout_sec", "wsl_timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class BunConfig(BaseModel):
    """Bun lookup configuration.

    Env vars:
        ENVSCOUT__BUN__RESOURCES_DIR: Directory holding the application-bundled binaries
        ENVSCOUT__BUN__VENDOR_DIR: Development vendor directory
    """

    resources_dir: str | None = Field(
        default=None,
        description="Packaged application resources. Default: <executable dir>/resources "
        "when running frozen, otherwise the bundled lookup is skipped.",
    )
    vendor_dir: str | None = Field(
        default=None,
        description="Development vendor directory. Default: ./vendor. "
        "Never consulted by frozen builds.",
    )


class ShellEnvConfig(BaseModel):
    """Login-shell environment import configuration.

    Env vars:
        ENVSCOUT__SHELL_ENV__TIMEOUT_SEC: Timeout for the login shell
        ENVSCOUT__SHELL_ENV__SHELL: Shell override (default: $SHELL)
    """

    platforms: list[ShellEnvPlatform] = Field(
        default_factory=lambda: ["darwin"],
        description="Platforms where GUI launches miss the login-shell environment.",
    )
    timeout_sec: float = Field(
        default=5.0,
        description="Timeout for the login shell. Slow shell rc files can exceed it.",
    )
    shell: str | None = Field(
        default=None,
        description="Shell to run. Default: $SHELL, falling back to the platform shell.",
    )


class EnvScoutConfig(BaseModel):
    """Root configuration for envscout.

    All settings can be configured via:
    1. Environment variables: ENVSCOUT__SECTION__KEY
    2. A YAML config file
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)
    bun: BunConfig = Field(default_factory=BunConfig)
    shell_env: ShellEnvConfig = Field(default_factory=ShellEnvConfig)
