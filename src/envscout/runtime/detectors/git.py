"""Git detection."""

from __future__ import annotations

from pathlib import Path

from envscout.runtime.detectors.base import ExecutableDetector


class GitDetector(ExecutableDetector):
    tool_name = "Git"
    executable = "git"

    def default_search_paths(self) -> list[Path]:
        if self.host.is_windows:
            program_files = self._environ.get("ProgramFiles", r"C:\Program Files")
            return [
                Path(program_files) / "Git" / "cmd" / "git.exe",
                Path(program_files) / "Git" / "bin" / "git.exe",
            ]
        return [
            Path("/usr/bin/git"),
            Path("/usr/local/bin/git"),
            Path("/opt/homebrew/bin/git"),
        ]
