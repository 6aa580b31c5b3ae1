"""Tests for host platform identification and Bun metadata."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from envscout.runtime.platform import (
    SUPPORTED_PLATFORM_ARCHES,
    HostPlatform,
    get_bun_download_info,
)


class TestHostPlatform:
    @pytest.mark.parametrize(
        ("sys_platform", "machine", "expected"),
        [
            ("darwin", "arm64", "darwin-arm64"),
            ("darwin", "x86_64", "darwin-x64"),
            ("linux", "aarch64", "linux-arm64"),
            ("linux", "x86_64", "linux-x64"),
            ("win32", "AMD64", "win32-x64"),
        ],
    )
    def test_current_maps_supported_hosts(
        self, sys_platform: str, machine: str, expected: str
    ) -> None:
        with (
            patch("envscout.runtime.platform.sys.platform", sys_platform),
            patch("envscout.runtime.platform.platform.machine", return_value=machine),
        ):
            host = HostPlatform.current()

        assert host.platform_arch == expected

    def test_windows_arm_is_unsupported(self) -> None:
        assert HostPlatform(os="win32", arch="arm64").platform_arch is None

    def test_unknown_arch_is_unsupported(self) -> None:
        with (
            patch("envscout.runtime.platform.sys.platform", "linux"),
            patch("envscout.runtime.platform.platform.machine", return_value="riscv64"),
        ):
            host = HostPlatform.current()

        assert host.arch is None
        assert host.platform_arch is None

    def test_executable_name(self) -> None:
        assert HostPlatform(os="win32", arch="x64").executable_name("bun") == "bun.exe"
        assert HostPlatform(os="linux", arch="x64").executable_name("bun") == "bun"


class TestBunDownloadInfo:
    def test_five_supported_combinations(self) -> None:
        assert len(SUPPORTED_PLATFORM_ARCHES) == 5

    def test_windows_binary_name(self) -> None:
        info = get_bun_download_info("win32-x64", version="1.2.0")

        assert info.binary_name == "bun.exe"
        assert info.zip_file_name == "bun-windows-x64.zip"
        assert info.url == (
            "https://github.com/oven-sh/bun/releases/download/bun-v1.2.0/bun-windows-x64.zip"
        )

    def test_arm_uses_aarch64_archive(self) -> None:
        info = get_bun_download_info("darwin-arm64")

        assert info.binary_name == "bun"
        assert info.zip_file_name == "bun-darwin-aarch64.zip"
