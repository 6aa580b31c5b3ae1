"""Node.js detection."""

from __future__ import annotations

from pathlib import Path

from envscout.runtime.detectors.base import ExecutableDetector, home_dir


class NodeDetector(ExecutableDetector):
    tool_name = "Node.js"
    executable = "node"

    def default_search_paths(self) -> list[Path]:
        if self.host.is_windows:
            program_files = self._environ.get("ProgramFiles", r"C:\Program Files")
            appdata = self._environ.get("APPDATA")
            paths = [Path(program_files) / "nodejs" / "node.exe"]
            if appdata:
                paths.append(Path(appdata) / "nvm" / "current" / "node.exe")
            return paths
        return [
            Path("/usr/local/bin/node"),
            Path("/opt/homebrew/bin/node"),
            Path("/usr/bin/node"),
            home_dir(self._environ) / ".volta" / "bin" / "node",
        ]
