"""Tests for settings loading."""

import pytest
from munge.config import CONFIG_ENV_VAR, Settings, load_settings
from munge.errors import ConfigError


def test_defaults(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    settings = load_settings()
    assert settings == Settings()
    assert settings.log_level == "WARNING"
    assert settings.output_format == "json"


def test_load_yaml(tmp_path):
    path = tmp_path / "munge.yaml"
    path.write_text("log_level: debug\nlog_format: json\noutput_format: yaml\n")
    settings = load_settings(path)
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"
    assert settings.output_format == "yaml"


def test_env_var(tmp_path, monkeypatch):
    path = tmp_path / "munge.yaml"
    path.write_text("html_parser: html.parser\nlog_level: INFO\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert load_settings().log_level == "INFO"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "munge.yaml"
    path.write_text("")
    assert load_settings(path) == Settings()


@pytest.mark.parametrize("content", [
    "log_level: LOUD\n",
    "output_format: xml\n",
    "unknown_key: 1\n",
    "- a\n- b\n",
    "log_level: [unclosed\n",
])
def test_invalid_settings(tmp_path, content):
    path = tmp_path / "munge.yaml"
    path.write_text(content)
    with pytest.raises(ConfigError):
        load_settings(path)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError) as exc_info:
        load_settings(tmp_path / "nope.yaml")
    assert "not found" in str(exc_info.value)
