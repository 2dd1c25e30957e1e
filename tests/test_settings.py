"""Tests for reading settings from the environment."""

import importlib

import pytest

from lol_match_crawler.config import Settings

settings_module = importlib.import_module("lol_match_crawler.config.settings")


@pytest.fixture
def invalid_env(monkeypatch):
    """A fresh record of unparseable values, discarded after the test."""
    recorded = {}
    monkeypatch.setattr(settings_module, "_INVALID_ENV", recorded)
    monkeypatch.setattr(Settings, "RIOT_API_KEY", "RGAPI-test")
    return recorded


class TestEnvParsing:
    """Test that malformed values are reported by validate(), not at import."""

    def test_unset_value_uses_default(self, monkeypatch, invalid_env):
        monkeypatch.delenv("TARGET_MATCHES", raising=False)
        assert settings_module._env_int("TARGET_MATCHES", 100) == 100
        assert invalid_env == {}

    def test_valid_values_are_parsed(self, monkeypatch, invalid_env):
        monkeypatch.setenv("TARGET_MATCHES", " 250 ")
        monkeypatch.setenv("RETRY_BACKOFF_BASE_S", "0.5")
        monkeypatch.setenv("ELIGIBLE_QUEUES", "420, 440")

        assert settings_module._env_int("TARGET_MATCHES", 100) == 250
        assert settings_module._env_float("RETRY_BACKOFF_BASE_S", 1.0) == 0.5
        assert settings_module._env_int_list("ELIGIBLE_QUEUES", [420]) == [420, 440]
        assert invalid_env == {}

    def test_malformed_value_is_recorded_and_defaults(self, monkeypatch, invalid_env):
        monkeypatch.setenv("TARGET_MATCHES", "lots")

        assert settings_module._env_int("TARGET_MATCHES", 100) == 100
        assert invalid_env == {"TARGET_MATCHES": "lots"}

    def test_validate_reports_malformed_value(self, monkeypatch, invalid_env):
        monkeypatch.setenv("ELIGIBLE_QUEUES", "420,flex")
        settings_module._env_int_list("ELIGIBLE_QUEUES", [420, 440])

        with pytest.raises(ValueError, match="ELIGIBLE_QUEUES"):
            Settings.validate()

    @pytest.mark.parametrize("raw, expected", [("true", True), ("1", True), ("false", False), ("no", False)])
    def test_boolean_flags(self, monkeypatch, raw, expected):
        monkeypatch.setenv("ADOPT_RATE_LIMIT_HEADERS", raw)
        assert settings_module._env_bool("ADOPT_RATE_LIMIT_HEADERS", True) is expected


class TestValidate:
    """Test the checks run before a crawl starts."""

    def test_defaults_are_valid(self, invalid_env):
        Settings.validate()

    def test_api_key_can_be_skipped(self, monkeypatch, invalid_env, tmp_path):
        monkeypatch.setattr(Settings, "RIOT_API_KEY", "")
        monkeypatch.setattr(Settings, "RIOT_API_KEY_FILE", str(tmp_path / "missing-key.txt"))

        with pytest.raises(ValueError, match="RIOT_API_KEY"):
            Settings.validate()
        Settings.validate(require_api_key=False)

    @pytest.mark.parametrize("value", ["20", "0:1", "20:0"])
    def test_rate_limits_must_be_positive_pairs(self, monkeypatch, invalid_env, value):
        monkeypatch.setattr(Settings, "MATCH_RATE_LIMITS", value)

        with pytest.raises(ValueError, match="MATCH_RATE_LIMITS"):
            Settings.validate()

    def test_negative_depth(self, monkeypatch, invalid_env):
        monkeypatch.setattr(Settings, "MAX_DEPTH", -1)

        with pytest.raises(ValueError, match="MAX_DEPTH"):
            Settings.validate()
