"""Configuration module for the customer/post data layer.

Type-safe configuration with Pydantic Settings plus Loguru logging helpers.

Public API:
----------
settings: Settings instance
    Pydantic settings object with nested configuration

get_config(key: str, default=None) -> Any
    Flat-key configuration access

get_logger(name: str) -> Logger
    Get a context-aware logger for your module

setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

log_startup_info() -> None
    Log system configuration at startup

configure_sqlalchemy_logging() -> None
    Route SQLAlchemy logs through Loguru

Usage:
------
```python
from customer_posts.config import settings, get_logger
db_url = settings.database.url
logger = get_logger(__name__)
```
"""

from .logging import (
    configure_sqlalchemy_logging,
    get_logger,
    log_startup_info,
    setup_loguru_logger,
)
from .settings import get_config, settings

__all__ = [
    "configure_sqlalchemy_logging",
    "get_config",
    "get_logger",
    "log_startup_info",
    "settings",
    "setup_loguru_logger",
]
