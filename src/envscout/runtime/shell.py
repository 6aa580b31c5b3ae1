"""Pick the preferred POSIX shell environment on Windows."""

from __future__ import annotations

from envscout.runtime.models import (
    RecommendedShell,
    ShellEnvironmentStatus,
    ToolStatus,
    WslStatus,
)


def recommend_shell(git_bash: ToolStatus, wsl: WslStatus) -> RecommendedShell | None:
    """Git Bash beats WSL; WSL 1 and WSL 2 are treated alike."""
    if git_bash.available:
        return "git-bash"
    if wsl.available:
        return "wsl"
    return None


def resolve_shell_environment(git_bash: ToolStatus, wsl: WslStatus) -> ShellEnvironmentStatus:
    return ShellEnvironmentStatus(
        git_bash=git_bash,
        wsl=wsl,
        recommended=recommend_shell(git_bash, wsl),
    )
