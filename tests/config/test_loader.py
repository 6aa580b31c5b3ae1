"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- load_config() precedence: kwargs > env vars > YAML > defaults
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from envscout.config.loader import _load_yaml, load_config
from envscout.config.models import EnvScoutConfig
from envscout.core.errors import ConfigError, ErrorCode


@pytest.fixture(autouse=True)
def _no_global_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's real global config and env out of these tests."""
    for name in ("ENVSCOUT__LOGGING__LEVEL", "ENVSCOUT__PROBE__TIMEOUT_SEC"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(
        "envscout.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "missing" / "config.yaml"
    )


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("logging:\n  level: DEBUG\n")

        assert _load_yaml(yaml_file) == {"logging": {"level": "DEBUG"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_on_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("probe: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_on_non_mapping(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- one\n- two\n")

        with pytest.raises(ConfigError, match="mapping"):
            _load_yaml(yaml_file)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults_without_any_source(self) -> None:
        config = load_config()

        assert isinstance(config, EnvScoutConfig)
        assert config.probe.timeout_sec == 5.0

    def test_yaml_values_applied(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("probe:\n  timeout_sec: 7.5\nbun:\n  vendor_dir: /opt/vendor\n")

        config = load_config(yaml_file)

        assert config.probe.timeout_sec == 7.5
        assert config.bun.vendor_dir == "/opt/vendor"

    def test_env_overrides_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("logging:\n  level: WARNING\n")

        with patch.dict("os.environ", {"ENVSCOUT__LOGGING__LEVEL": "DEBUG"}):
            config = load_config(yaml_file)

        assert config.logging.level == "DEBUG"

    def test_kwargs_override_env(self) -> None:
        with patch.dict("os.environ", {"ENVSCOUT__PROBE__TIMEOUT_SEC": "9"}):
            config = load_config(probe={"timeout_sec": 3.0})

        assert config.probe.timeout_sec == 3.0

    def test_missing_explicit_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "absent.yaml")
        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("probe:\n  timeout_sec: -1\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "probe" in exc_info.value.details["field"]
