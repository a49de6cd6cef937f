"""
Tests for environment configuration.

Tests cover:
- FredSettings loading and defaults
- ServerSettings and CORS origins
- validate_settings problems
"""
import pytest

from app.config import (
    FredSettings,
    ServerSettings,
    Settings,
    validate_settings,
)


FRED_VARS = [
    "FRED_API_KEY", "NEXT_PUBLIC_FRED_API_KEY", "FRED_BASE_URL",
    "FRED_TIMEOUT_SECONDS", "FRED_MAX_WORKERS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for var in FRED_VARS + ["FRONTEND_URL", "REFRESH_INTERVAL_MINUTES", "LOG_LEVEL"]:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestFredSettings:
    def test_defaults(self, clean_env):
        settings = FredSettings.from_env()

        assert settings.api_key is None
        assert settings.has_credential is False
        assert settings.base_url == "https://api.stlouisfed.org/fred"
        assert settings.timeout_seconds == 10.0
        assert settings.max_workers == 5

    def test_loads_from_env(self, clean_env):
        clean_env.setenv("FRED_API_KEY", " abc123 ")
        clean_env.setenv("FRED_BASE_URL", "https://proxy.local/fred/")
        clean_env.setenv("FRED_TIMEOUT_SECONDS", "2.5")
        clean_env.setenv("FRED_MAX_WORKERS", "3")

        settings = FredSettings.from_env()

        assert settings.api_key == "abc123"
        assert settings.base_url == "https://proxy.local/fred"
        assert settings.timeout_seconds == 2.5
        assert settings.max_workers == 3

    def test_legacy_key_name_accepted(self, clean_env):
        clean_env.setenv("NEXT_PUBLIC_FRED_API_KEY", "legacy")

        assert FredSettings.from_env().api_key == "legacy"

    def test_malformed_numbers_fall_back_to_defaults(self, clean_env):
        clean_env.setenv("FRED_TIMEOUT_SECONDS", "ten")
        clean_env.setenv("FRED_MAX_WORKERS", "3.5")

        settings = FredSettings.from_env()

        assert settings.timeout_seconds == 10.0
        assert settings.max_workers == 5


class TestServerSettings:
    def test_frontend_url_added_to_origins(self, clean_env):
        clean_env.setenv("FRONTEND_URL", "https://dash.example.com")

        settings = ServerSettings.from_env()

        assert "https://dash.example.com" in settings.allowed_origins
        assert "http://localhost:3000" in settings.allowed_origins

    def test_refresh_interval(self, clean_env):
        clean_env.setenv("REFRESH_INTERVAL_MINUTES", "15")

        assert ServerSettings.from_env().refresh_interval_minutes == 15

    def test_malformed_refresh_interval_falls_back(self, clean_env):
        clean_env.setenv("REFRESH_INTERVAL_MINUTES", "soon")

        assert ServerSettings.from_env().refresh_interval_minutes == 30


class TestValidateSettings:
    def test_missing_key_reported(self):
        problems = validate_settings(Settings())

        assert any("FRED_API_KEY" in p for p in problems)

    def test_valid_settings(self):
        settings = Settings(fred=FredSettings(api_key="key"))

        assert validate_settings(settings) == []

    def test_bad_numbers_reported(self):
        settings = Settings(
            fred=FredSettings(api_key="key", timeout_seconds=0, max_workers=0),
            server=ServerSettings(refresh_interval_minutes=0),
        )

        assert len(validate_settings(settings)) == 3

    def test_env_numbers_reach_validation(self, clean_env):
        clean_env.setenv("FRED_API_KEY", "key")
        clean_env.setenv("FRED_TIMEOUT_SECONDS", "0")
        clean_env.setenv("FRED_MAX_WORKERS", "bogus")

        settings = Settings(fred=FredSettings.from_env())

        assert validate_settings(settings) == ["FRED_TIMEOUT_SECONDS must be positive"]
