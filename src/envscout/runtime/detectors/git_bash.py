"""Git Bash detection (Windows only).

Looks for the ``bash.exe`` shipped with Git for Windows. A ``bash`` on PATH
that lives in the Windows system directory is the WSL launcher, not Git
Bash, and is ignored.
"""

from __future__ import annotations

from pathlib import Path, PureWindowsPath

from envscout.runtime.detectors.base import ExecutableDetector


class GitBashDetector(ExecutableDetector):
    tool_name = "Git Bash"
    executable = "bash"

    def applies_to_host(self) -> bool:
        return self.host.is_windows

    def accept_path_hit(self, path: str) -> bool:
        system_root = self._environ.get("SystemRoot", r"C:\Windows")
        system_dir = PureWindowsPath(system_root, "System32")
        try:
            PureWindowsPath(path).relative_to(system_dir)
        except ValueError:
            return True
        return False

    def default_search_paths(self) -> list[Path]:
        roots = [
            self._environ.get("ProgramFiles", r"C:\Program Files"),
            self._environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)"),
        ]
        local_appdata = self._environ.get("LOCALAPPDATA")
        paths = [Path(root) / "Git" / "bin" / "bash.exe" for root in roots]
        if local_appdata:
            paths.append(Path(local_appdata) / "Programs" / "Git" / "bin" / "bash.exe")
        return paths
