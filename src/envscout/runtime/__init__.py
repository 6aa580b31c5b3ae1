"""Runtime environment detection."""

from envscout.git.models import GitRepoStatus
from envscout.runtime.coordinator import (
    Detectors,
    RuntimeCoordinator,
    get_coordinator,
    get_git_repo_status,
    get_runtime_status,
    initialize_runtime,
    is_runtime_initialized,
    reinitialize_runtime,
    set_coordinator,
)
from envscout.runtime.models import (
    BunStatus,
    DetectionReason,
    RuntimeInitOptions,
    RuntimeStatus,
    ShellEnvironmentStatus,
    ShellEnvResult,
    ToolStatus,
    WslStatus,
)
from envscout.runtime.platform import (
    BunDownloadInfo,
    HostPlatform,
    get_bun_download_info,
)
from envscout.runtime.probe import ProbeResult, ProcessProbe

__all__ = [
    # Coordinator
    "RuntimeCoordinator",
    "Detectors",
    "get_coordinator",
    "set_coordinator",
    "initialize_runtime",
    "reinitialize_runtime",
    "get_runtime_status",
    "is_runtime_initialized",
    "get_git_repo_status",
    # Models
    "ToolStatus",
    "BunStatus",
    "WslStatus",
    "ShellEnvironmentStatus",
    "RuntimeStatus",
    "RuntimeInitOptions",
    "ShellEnvResult",
    "GitRepoStatus",
    "DetectionReason",
    # Platform
    "HostPlatform",
    "BunDownloadInfo",
    "get_bun_download_info",
    # Probe
    "ProcessProbe",
    "ProbeResult",
]
