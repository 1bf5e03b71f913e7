"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation.

The configuration is organized into logical groups:
- DatabaseConfig: Database connection and pooling settings
- LoggingConfig: Logging levels, files, and debugging options
"""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """Database connection and pooling configuration."""

    url: str = "sqlite+aiosqlite:///data/db/customer_posts.db"
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 1800
    busy_timeout_ms: int = 30000


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("customer_posts.log")
    real_time_debug: bool = True


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: DATABASE_URL, CONSOLE_LOG_LEVEL
    - Nested: DATABASE__URL, LOGGING__CONSOLE_LEVEL

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()

    data_dir: Path = Path("data")

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Map flat environment variables (DATABASE_URL) onto the nested groups."""
        if not isinstance(data, dict):
            return data

        transformed: dict[str, dict[str, Any]] = {}

        db_mapping = {
            "database_url": "url",
            "database_echo": "echo",
            "database_pool_size": "pool_size",
            "database_max_overflow": "max_overflow",
            "database_pool_timeout": "pool_timeout",
            "database_pool_recycle": "pool_recycle",
            "database_busy_timeout_ms": "busy_timeout_ms",
        }
        for env_key, field_key in db_mapping.items():
            if env_key in data:
                transformed.setdefault("database", {})[field_key] = data.pop(env_key)
            elif env_key.upper() in os.environ:
                transformed.setdefault("database", {})[field_key] = os.environ[
                    env_key.upper()
                ]

        log_mapping = {
            "console_log_level": "console_level",
            "file_log_level": "file_level",
            "log_file": "log_file",
            "log_real_time_debug": "real_time_debug",
        }
        for env_key, field_key in log_mapping.items():
            if env_key in data:
                transformed.setdefault("logging", {})[field_key] = data.pop(env_key)
            elif env_key.upper() in os.environ:
                transformed.setdefault("logging", {})[field_key] = os.environ[
                    env_key.upper()
                ]

        for group, values in transformed.items():
            existing = data.get(group)
            if isinstance(existing, dict):
                data[group] = {**existing, **values}
            else:
                data[group] = values

        return data


# Singleton instance for application use
settings = Settings()


# =============================================================================
# BACKWARD COMPATIBILITY FUNCTIONS
# =============================================================================

_LEGACY_KEY_MAP = {
    "DATABASE_URL": lambda: settings.database.url,
    "DATABASE_ECHO": lambda: settings.database.echo,
    "DATABASE_POOL_SIZE": lambda: settings.database.pool_size,
    "DATABASE_MAX_OVERFLOW": lambda: settings.database.max_overflow,
    "DATABASE_POOL_TIMEOUT": lambda: settings.database.pool_timeout,
    "DATABASE_POOL_RECYCLE": lambda: settings.database.pool_recycle,
    "DATABASE_BUSY_TIMEOUT_MS": lambda: settings.database.busy_timeout_ms,
    "CONSOLE_LOG_LEVEL": lambda: settings.logging.console_level,
    "FILE_LOG_LEVEL": lambda: settings.logging.file_level,
    "LOG_FILE": lambda: settings.logging.log_file,
    "LOG_REAL_TIME_DEBUG": lambda: settings.logging.real_time_debug,
    "DATA_DIR": lambda: settings.data_dir,
}


def get_config(key: str, default=None):
    """Get configuration value by key with optional default.

    Maps flat keys to the nested Pydantic settings structure.

    Example:
        >>> db_url = get_config("DATABASE_URL")
    """
    if key in _LEGACY_KEY_MAP:
        return _LEGACY_KEY_MAP[key]()

    return default
