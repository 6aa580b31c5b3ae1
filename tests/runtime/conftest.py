"""Fixtures for runtime detection tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from envscout.core.errors import ProbeError
from envscout.runtime.platform import HostPlatform
from envscout.runtime.probe import ProbeResult, ProcessProbe

Response = str | ProbeError


class FakeProbe(ProcessProbe):
    """Probe returning canned output keyed by executable (or full shell command)."""

    def __init__(self, responses: dict[str, Response] | None = None) -> None:
        super().__init__()
        self.responses = dict(responses or {})
        self.calls: list[Sequence[str] | str] = []
        self.timeouts: list[float | None] = []

    async def run(
        self,
        command: Sequence[str] | str,
        *,
        timeout_sec: float | None = None,
    ) -> ProbeResult:
        self.calls.append(command)
        self.timeouts.append(timeout_sec)
        key = command if isinstance(command, str) else command[0]
        response = self.responses.get(key)
        if response is None:
            raise ProbeError.not_found(key, "no canned response")
        if isinstance(response, ProbeError):
            raise response
        return ProbeResult(stdout=response, stderr="", exit_code=0)


@pytest.fixture
def make_probe() -> Callable[..., FakeProbe]:
    def _make(responses: dict[str, Response] | None = None) -> FakeProbe:
        return FakeProbe(responses)

    return _make


@pytest.fixture
def linux_host() -> HostPlatform:
    return HostPlatform(os="linux", arch="x64")


@pytest.fixture
def mac_host() -> HostPlatform:
    return HostPlatform(os="darwin", arch="arm64")


@pytest.fixture
def windows_host() -> HostPlatform:
    return HostPlatform(os="win32", arch="x64")


@pytest.fixture
def make_executable(tmp_path: Path) -> Callable[[str], Path]:
    """Create an empty file standing in for an installed binary."""

    def _make(relative: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")
        return path

    return _make
