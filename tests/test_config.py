"""Tests for envoverlay.config settings."""

import logging
from pathlib import Path

import pytest

from envoverlay.config import OverlaySettings, get_settings, reset_settings
from envoverlay.exceptions import ConfigurationError


class TestOverlaySettings:
    """Tests for OverlaySettings."""

    def test_defaults(self):
        """Test that an empty environment yields defaults."""
        settings = OverlaySettings.from_env(env={})

        assert settings.peer_url is None
        assert settings.peer_timeout == 30.0
        assert settings.host == "127.0.0.1"
        assert settings.port == 8765
        assert settings.log_level == "INFO"
        assert settings.log_json is False

    def test_from_env(self):
        settings = OverlaySettings.from_env(
            env={
                "ENVOVERLAY_PEER_URL": "http://build-01:9000",
                "ENVOVERLAY_PEER_TIMEOUT": "2.5",
                "ENVOVERLAY_HOST": "0.0.0.0",
                "ENVOVERLAY_PORT": "9000",
                "ENVOVERLAY_LOG_LEVEL": "debug",
                "ENVOVERLAY_LOG_JSON": "TRUE",
            }
        )

        assert settings.peer_url == "http://build-01:9000"
        assert settings.peer_timeout == 2.5
        assert settings.host == "0.0.0.0"
        assert settings.port == 9000
        assert settings.log_level == "DEBUG"
        assert settings.log_level_number == logging.DEBUG
        assert settings.log_json is True

    def test_custom_prefix(self):
        settings = OverlaySettings.from_env(prefix="AGENT", env={"AGENT_PORT": "7000"})

        assert settings.port == 7000

    def test_empty_peer_url_means_none(self):
        assert OverlaySettings.from_env(env={"ENVOVERLAY_PEER_URL": ""}).peer_url is None

    @pytest.mark.parametrize(
        "env",
        [
            {"ENVOVERLAY_PORT": "eighty"},
            {"ENVOVERLAY_PORT": "0"},
            {"ENVOVERLAY_PORT": "70000"},
            {"ENVOVERLAY_PEER_TIMEOUT": "-1"},
            {"ENVOVERLAY_PEER_TIMEOUT": "soon"},
            {"ENVOVERLAY_LOG_LEVEL": "LOUD"},
        ],
    )
    def test_invalid_values_raise(self, env):
        with pytest.raises(ConfigurationError) as exc_info:
            OverlaySettings.from_env(env=env)
        assert exc_info.value.code == "CONFIGURATION_ERROR"


class TestSettingsSingleton:
    """Tests for get_settings/reset_settings."""

    def test_cached(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ENVOVERLAY_PORT", "9100")

        first = get_settings()
        monkeypatch.setenv("ENVOVERLAY_PORT", "9200")

        assert get_settings() is first
        assert first.port == 9100

    def test_reset_reloads(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ENVOVERLAY_PORT", "9100")
        get_settings()

        reset_settings()
        monkeypatch.setenv("ENVOVERLAY_PORT", "9200")

        assert get_settings().port == 9200

    def test_reads_dotenv_in_cwd(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        """Test that a .env file in the working directory is honoured."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("ENVOVERLAY_PEER_URL", raising=False)
        (tmp_path / ".env").write_text("ENVOVERLAY_PEER_URL=http://from-dotenv:8765\n")

        assert get_settings().peer_url == "http://from-dotenv:8765"
