"""
Unit tests for application configuration.
"""

import pytest
from pydantic import ValidationError

from notekeep.config import Settings, get_settings


class TestSettings:
    """Test Settings configuration class."""

    def test_default_settings(self, monkeypatch):
        for name in ("DEBUG", "ENVIRONMENT", "DATABASE_URL", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)

        assert settings.app_name == "NoteKeep API"
        assert settings.debug is False
        assert settings.api_prefix == "/api/v1"
        assert settings.database_url.startswith("postgresql+asyncpg://")

        # tokens
        assert settings.jwt_algorithm == "HS256"
        assert settings.access_token_expire_minutes == 15
        assert settings.refresh_token_expire_hours == 5
        assert settings.access_token_secret != settings.refresh_token_secret

        # passwords and usernames
        assert settings.password_hash_rounds == 12
        assert settings.password_min_length == 8
        assert settings.password_max_length == 30
        assert settings.username_max_attempts == 5

        # rate limiting
        assert settings.rate_limit_backend == "memory"
        assert settings.auth_rate_limit_requests == 5
        assert settings.note_rate_limit_requests == 30
        assert settings.rate_limit_window_seconds == 900

        assert settings.default_page_size == 10
        assert settings.max_page_size == 100

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "5")
        monkeypatch.setenv("RATE_LIMIT_BACKEND", "redis")
        monkeypatch.setenv("BLOCKED_EMAIL_DOMAINS", '["spam.io"]')

        settings = Settings(_env_file=None)

        assert settings.access_token_expire_minutes == 5
        assert settings.rate_limit_backend == "redis"
        assert settings.blocked_email_domains == ["spam.io"]

    def test_equal_secrets_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, access_token_secret="same", refresh_token_secret="same")

    def test_min_length_above_max_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, password_min_length=20, password_max_length=10)

    @pytest.mark.parametrize("rounds", [4, 9, 13])
    def test_hash_rounds_bounds(self, rounds):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, password_hash_rounds=rounds)

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, rate_limit_backend="memcached")

    def test_is_production(self):
        assert Settings(_env_file=None, environment="production").is_production is True
        assert Settings(_env_file=None, environment="development").is_production is False


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
