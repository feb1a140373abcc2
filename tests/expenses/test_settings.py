"""Tests for conversion from raw config mappings and environment into typed settings."""

from pathlib import Path

import pytest

from expenses.config import ClientConfig
from expenses.settings import ClientSettings, resolve_settings


def test_settings_defaults_for_empty_config() -> None:
    """Missing sections fall back to the documented defaults."""
    settings = ClientSettings.from_config(ClientConfig(raw={}))

    assert settings.api_url == "http://localhost:8080"
    assert settings.timeout_s == 10.0
    assert settings.credentials_path == Path(".credentials.json")
    assert settings.log_level == "WARNING"
    assert settings.log_path is None
    assert settings.debug is False


def test_settings_from_config_casts_values(sample_config_dict: dict) -> None:
    """Every section is converted into typed fields."""
    settings = ClientSettings.from_config(ClientConfig(raw=sample_config_dict))

    assert settings.api_url == "http://expenses.test"
    assert settings.timeout_s == 3.0
    assert settings.credentials_path == Path("state/creds.json")
    assert settings.log_level == "debug"
    assert settings.log_path == Path("logs/failures.log")
    assert settings.debug is True


def test_settings_reject_non_mapping_section() -> None:
    """A scalar where a section belongs fails early with a clear error."""
    with pytest.raises(ValueError, match="section must be a mapping: api"):
        ClientSettings.from_config(ClientConfig(raw={"api": "http://x"}))


def test_resolve_settings_reads_config_file_and_env_override(tmp_path: Path) -> None:
    """EXPENSES_CONFIG selects the file; EXPENSES_API_URL wins over api.url."""
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("api:\n  url: http://from-file\ndebug: true\n", encoding="utf-8")

    settings = resolve_settings({"EXPENSES_CONFIG": str(cfg_path), "EXPENSES_API_URL": "http://from-env/"})

    assert settings.api_url == "http://from-env"
    assert settings.debug is True


def test_resolve_settings_without_environment_uses_defaults() -> None:
    """No variables set: defaults only, no file access."""
    assert resolve_settings({}) == ClientSettings()
