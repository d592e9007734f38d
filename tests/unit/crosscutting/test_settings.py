"""
Unit tests for crosscutting/config.py (Settings validation).

Tests:
  - Defaults suitable for local development
  - Rate limit values must be positive
  - Pool bounds
  - Production security requirements (JWT secret, DATABASE_URL)
  - uses_postgres() switch and CORS origin parsing

Note:
  - Uses monkeypatch to set environment variables
"""

import pytest
from pydantic import ValidationError

from cvshare.crosscutting.config import Settings

pytestmark = pytest.mark.unit


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        settings = Settings()

        assert settings.database_url == ""
        assert settings.rate_limit_enabled is True
        assert settings.access_rate_limit_window_ms == 60_000
        assert settings.access_rate_limit_max_requests == 10
        assert settings.privacy_rate_limit_max_requests == 5
        assert settings.jwt_access_ttl_minutes == 30

    @pytest.mark.parametrize(
        "var",
        [
            "ACCESS_RATE_LIMIT_WINDOW_MS",
            "ACCESS_RATE_LIMIT_MAX_REQUESTS",
            "PRIVACY_RATE_LIMIT_WINDOW_MS",
            "PRIVACY_RATE_LIMIT_MAX_REQUESTS",
        ],
    )
    def test_rate_limit_values_must_be_positive(self, monkeypatch, var):
        monkeypatch.setenv(var, "0")

        with pytest.raises(ValidationError) as exc_info:
            Settings()

        assert "must be greater than 0" in str(exc_info.value)

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert Settings().log_level == "DEBUG"

    def test_unknown_log_level_fails(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError):
            Settings()

    def test_pool_min_above_max_fails(self, monkeypatch):
        monkeypatch.setenv("DB_POOL_MIN_SIZE", "5")
        monkeypatch.setenv("DB_POOL_MAX_SIZE", "2")

        with pytest.raises(ValidationError) as exc_info:
            Settings()

        assert "db_pool_min_size" in str(exc_info.value)


class TestProductionRequirements:
    @pytest.fixture(autouse=True)
    def production_env(self, monkeypatch):
        monkeypatch.setenv("APP_ENV", "production")
        monkeypatch.setenv("JWT_SECRET", "s" * 48)
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/cvshare")

    def test_valid_production_settings(self):
        settings = Settings()

        assert settings.is_production() is True
        assert settings.uses_postgres() is True

    @pytest.mark.parametrize("secret", ["dev-secret", "changeme", "short-secret"])
    def test_weak_jwt_secret_fails(self, monkeypatch, secret):
        monkeypatch.setenv("JWT_SECRET", secret)

        with pytest.raises(ValidationError) as exc_info:
            Settings()

        assert "JWT_SECRET" in str(exc_info.value)

    def test_database_url_required(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "")

        with pytest.raises(ValidationError) as exc_info:
            Settings()

        assert "DATABASE_URL is required" in str(exc_info.value)


class TestHelpers:
    def test_test_env_never_uses_postgres(self, monkeypatch):
        monkeypatch.setenv("APP_ENV", "test")
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/cvshare")

        assert Settings().uses_postgres() is False

    def test_allowed_origins_list(self, monkeypatch):
        monkeypatch.setenv(
            "ALLOWED_ORIGINS", "https://cv.example.com, http://localhost:3000,,"
        )

        assert Settings().get_allowed_origins_list() == [
            "https://cv.example.com",
            "http://localhost:3000",
        ]

    def test_trusted_proxies_default_empty(self, monkeypatch):
        monkeypatch.delenv("TRUSTED_PROXIES", raising=False)

        assert Settings().get_trusted_proxies() == frozenset()

    def test_trusted_proxies_set(self, monkeypatch):
        monkeypatch.setenv("TRUSTED_PROXIES", "10.0.0.1, 10.0.0.2,")

        assert Settings().get_trusted_proxies() == frozenset({"10.0.0.1", "10.0.0.2"})
