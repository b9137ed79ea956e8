"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from gatekeeper.config import Settings


pytestmark = pytest.mark.unit


class TestSettings:
    """Tests for Settings."""

    def test_async_database_url(self):
        settings = Settings(database_url="postgresql://u:p@db:5432/gatekeeper")
        expected = "postgresql+asyncpg://u:p@db:5432/gatekeeper"
        assert settings.async_database_url == expected

    def test_non_postgres_url_unchanged(self):
        settings = Settings(database_url="sqlite+aiosqlite:///gatekeeper.db")
        assert settings.async_database_url == "sqlite+aiosqlite:///gatekeeper.db"

    def test_environment_flags(self):
        production = Settings(environment="production")
        assert production.is_production is True
        assert production.is_development is False

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    def test_session_cookie_from_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SESSION_COOKIE_NAME", "custom.session")
        assert Settings().session_cookie_name == "custom.session"
