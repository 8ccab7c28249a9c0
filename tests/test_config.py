"""Tests for configuration."""

from tickerprice.config import Settings, get_settings


def test_defaults(settings):
    assert settings.us_timeout_seconds == 10.0
    assert settings.il_timeout_seconds == 10.0
    assert settings.probe_timeout_seconds == 5.0
    assert settings.max_redirects == 5
    assert "{ticker}" in settings.yahoo_chart_url
    assert settings.themarker_url == "https://finance.themarker.com/mtf/{ticker}"


def test_env_override(monkeypatch):
    monkeypatch.setenv("TICKERPRICE_US_TIMEOUT_SECONDS", "3")
    monkeypatch.setenv("TICKERPRICE_LOG_LEVEL", "DEBUG")
    
    settings = Settings(_env_file=None)
    
    assert settings.us_timeout_seconds == 3.0
    assert settings.log_level == "DEBUG"


def test_get_settings_is_shared():
    assert get_settings() is get_settings()
