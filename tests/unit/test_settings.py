"""Tests for settings loading and flat key compatibility."""

from customer_posts.config import get_config, settings
from customer_posts.config.settings import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("DATABASE__URL", raising=False)

        config = Settings(_env_file=None)

        assert config.database.url.startswith("sqlite+aiosqlite://")
        assert config.logging.console_level == "INFO"

    def test_flat_env_vars_map_to_nested(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///flat.db")
        monkeypatch.setenv("CONSOLE_LOG_LEVEL", "WARNING")

        config = Settings(_env_file=None)

        assert config.database.url == "sqlite+aiosqlite:///flat.db"
        assert config.logging.console_level == "WARNING"

    def test_nested_env_vars(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("DATABASE__POOL_SIZE", "9")

        assert Settings(_env_file=None).database.pool_size == 9

    def test_get_config_reads_settings(self):
        assert get_config("DATABASE_URL") == settings.database.url
        assert get_config("NOT_A_KEY", "fallback") == "fallback"
