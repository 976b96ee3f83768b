"""Unit tests for application settings."""

from knowshare.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_development_defaults(self, monkeypatch):
        """Local development serves plain http with the port in the URL."""
        monkeypatch.delenv("HOST", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)

        settings = Settings(_env_file=None)

        assert settings.api.base_url == "http://localhost:8000"
        assert settings.database_url.startswith("postgresql+asyncpg://")
        assert "http://localhost:5173" in settings.api.allowed_origins

    def test_production_uses_https(self):
        """Non-local environments serve https on the standard port."""
        settings = Settings(
            _env_file=None, environment="production", host="api.knowshare.example"
        )

        assert settings.api.base_url == "https://api.knowshare.example"

    def test_nested_env_overrides(self, monkeypatch):
        """Nested settings are read with the __ delimiter."""
        monkeypatch.setenv("DATABASE__POOL_SIZE", "12")
        monkeypatch.setenv("API__EXTRA_ORIGINS", '["https://knowshare.example"]')

        settings = Settings(_env_file=None)

        assert settings.database.pool_size == 12
        assert "https://knowshare.example" in settings.api.allowed_origins
