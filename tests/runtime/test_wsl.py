"""Tests for WSL listing parsing and detection."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from envscout.core.errors import ProbeError
from envscout.runtime.detectors.wsl import (
    NO_DISTRIBUTION_ERROR,
    NOT_INSTALLED_ERROR,
    WSL_LIST_COMMAND,
    WslDetector,
    classify_wsl_error,
    parse_wsl_list_output,
)
from envscout.runtime.models import DetectionReason
from envscout.runtime.platform import HostPlatform

TYPICAL_LISTING = (
    "  NAME            STATE           VERSION\n"
    "* Ubuntu          Running         2\n"
    "  Debian          Stopped         1\n"
)


class TestParseWslListOutput:
    def test_default_and_all_distros(self) -> None:
        listing = parse_wsl_list_output(TYPICAL_LISTING)

        assert listing.distros == ("Ubuntu", "Debian")
        assert listing.default_distro == "Ubuntu"
        assert listing.version == 2

    def test_version_comes_from_default_row_only(self) -> None:
        output = (
            "  NAME      STATE      VERSION\n"
            "  Ubuntu    Running    2\n"
            "* Legacy    Stopped    1\n"
        )

        listing = parse_wsl_list_output(output)

        assert listing.default_distro == "Legacy"
        assert listing.version == 1

    def test_header_only(self) -> None:
        listing = parse_wsl_list_output("  NAME      STATE      VERSION\n")

        assert listing.distros == ()
        assert listing.default_distro is None
        assert listing.version is None

    def test_no_default_marker(self) -> None:
        listing = parse_wsl_list_output("  Ubuntu    Running    2\r\n")

        assert listing.distros == ("Ubuntu",)
        assert listing.default_distro is None
        assert listing.version is None

    def test_short_rows_ignored(self) -> None:
        output = TYPICAL_LISTING + "\n  garbage\n  also garbage\n"

        listing = parse_wsl_list_output(output)

        assert listing.distros == ("Ubuntu", "Debian")

    def test_header_filter_is_case_sensitive_substring(self) -> None:
        output = (
            "  NAME            STATE           VERSION\n"
            "* Nameless        Running         2\n"
            "  MY-STATE-BOX    Stopped         2\n"
        )

        listing = parse_wsl_list_output(output)

        # Rows containing an upper-case header word are treated as header lines
        assert listing.distros == ("Nameless",)
        assert listing.default_distro == "Nameless"

    def test_unknown_version_marker(self) -> None:
        listing = parse_wsl_list_output("* Ubuntu    Running    3\n")

        assert listing.default_distro == "Ubuntu"
        assert listing.version is None


class TestClassifyWslError:
    @pytest.mark.parametrize(
        ("message", "kind"),
        [
            ("'wsl.exe' is not recognized as an internal or external command", "not_installed"),
            ("Command not found: wsl.exe (no such file)", "not_installed"),
            ("Windows Subsystem for Linux has no installed distributions.", "no_distribution"),
            ("Command timed out after 10s: wsl.exe", "failed"),
            ("The service cannot be started", "failed"),
        ],
    )
    def test_classification(self, message: str, kind: str) -> None:
        assert classify_wsl_error(message) == kind


class TestWslDetector:
    @pytest.mark.asyncio
    async def test_available(
        self, make_probe: Callable[..., Any], windows_host: HostPlatform
    ) -> None:
        probe = make_probe({WSL_LIST_COMMAND: TYPICAL_LISTING})
        detector = WslDetector(probe, host=windows_host, timeout_sec=7.5)

        status = await detector.detect()

        assert status.available
        assert status.version == 2
        assert status.default_distro == "Ubuntu"
        assert status.distros == ("Ubuntu", "Debian")
        assert status.error is None
        assert probe.calls == [WSL_LIST_COMMAND]
        assert probe.timeouts == [7.5]

    @pytest.mark.asyncio
    async def test_non_windows_never_probes(
        self, make_probe: Callable[..., Any], mac_host: HostPlatform
    ) -> None:
        probe = make_probe({WSL_LIST_COMMAND: TYPICAL_LISTING})

        status = await WslDetector(probe, host=mac_host).detect()

        assert not status.available
        assert status.error == "non-Windows platform"
        assert status.reason == DetectionReason.PLATFORM_MISMATCH
        assert probe.calls == []

    @pytest.mark.asyncio
    async def test_no_distributions(
        self, make_probe: Callable[..., Any], windows_host: HostPlatform
    ) -> None:
        probe = make_probe({WSL_LIST_COMMAND: "  NAME      STATE      VERSION\n"})

        status = await WslDetector(probe, host=windows_host).detect()

        assert not status.available
        assert status.error == NO_DISTRIBUTION_ERROR
        assert status.distros == ()
        assert status.default_distro is None

    @pytest.mark.asyncio
    async def test_not_installed(
        self, make_probe: Callable[..., Any], windows_host: HostPlatform
    ) -> None:
        error = ProbeError.not_found(WSL_LIST_COMMAND, "exit code 9009")
        probe = make_probe({WSL_LIST_COMMAND: error})

        status = await WslDetector(probe, host=windows_host).detect()

        assert status.error == NOT_INSTALLED_ERROR
        assert status.reason == DetectionReason.TOOL_NOT_FOUND

    @pytest.mark.asyncio
    async def test_no_distribution_reported_as_failure(
        self, make_probe: Callable[..., Any], windows_host: HostPlatform
    ) -> None:
        error = ProbeError.failed(
            WSL_LIST_COMMAND, -1, "Windows Subsystem for Linux has no installed distributions."
        )
        probe = make_probe({WSL_LIST_COMMAND: error})

        status = await WslDetector(probe, host=windows_host).detect()

        assert status.error == NO_DISTRIBUTION_ERROR

    @pytest.mark.asyncio
    async def test_other_failure_keeps_message(
        self, make_probe: Callable[..., Any], windows_host: HostPlatform
    ) -> None:
        error = ProbeError.timeout(WSL_LIST_COMMAND, 10)
        probe = make_probe({WSL_LIST_COMMAND: error})

        status = await WslDetector(probe, host=windows_host).detect()

        assert not status.available
        assert (status.error or "").startswith("WSL detection failed: Command timed out")
