"""Logging configuration and utilities using Loguru.

This module provides centralized logging setup for the customer/post data
layer: structured logging with Loguru, a startup banner, and a bridge that
forwards SQLAlchemy's stdlib logging into Loguru.

Public API:
----------
setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

get_logger(name: str) -> Logger
    Get a context-aware logger for your module
    Usage: logger = get_logger(__name__)

log_startup_info() -> None
    Log system configuration at startup

configure_sqlalchemy_logging() -> None
    Route SQLAlchemy engine logs through our Loguru setup

Quick Start:
-----------
```python
from customer_posts.config import get_logger
logger = get_logger(__name__)
logger.info("Deleting customer", customer_id=42)
```
"""

import logging
from pathlib import Path
import sys
from typing import Any

from loguru import logger

from .settings import settings

SERVICE_NAME = "customer_posts"

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


def setup_loguru_logger(verbose: bool = False) -> None:
    """Configure Loguru logger for the application.

    Args:
        verbose: Enable verbose logging with debug level and detailed tracebacks

    Note:
        - Removes default logger and sets up console and file handlers
        - Console format is colorized and simplified
        - File format is serialized JSON with rotation and retention
    """
    logger.remove()

    log_file_path = Path(settings.logging.log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    logger.configure(extra={"service": SERVICE_NAME, "module": "root"})

    # -------------------------------------------------------------------------
    # Console Handler
    # -------------------------------------------------------------------------
    console_level = "DEBUG" if verbose else settings.logging.console_level
    logger.add(
        sink=sys.stderr,
        level=console_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:"
            "<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    # -------------------------------------------------------------------------
    # File Handler
    # -------------------------------------------------------------------------
    enqueue_logs = not settings.logging.real_time_debug
    logger.add(
        sink=str(log_file_path),
        level=settings.logging.file_level,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {process}:{thread} | {extra[service]} | {extra[module]} | {name}:{function}:{line} | {message}",
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        backtrace=True,
        diagnose=True,
        enqueue=enqueue_logs,
        catch=True,
        serialize=True,
    )


# =============================================================================
# LOGGER FACTORY
# =============================================================================


def get_logger(name: str) -> Any:  # Use Any for Loguru logger type
    """Get a pre-configured logger instance for the given module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Loguru logger bound with module and service context

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Post created", post_id=7)
        ```
    """
    return logger.bind(
        module=name,
        service=SERVICE_NAME,
    )


# =============================================================================
# STARTUP LOGGING
# =============================================================================


def log_startup_info() -> None:
    """Log a startup banner and every configuration value at debug level."""
    local_logger = get_logger(__name__)
    separator = "=" * 50

    local_logger.info("{}", separator)
    local_logger.info("Customer/Post data service")
    local_logger.info("{}", separator)

    local_logger.debug("Configuration:")
    config_dict = settings.model_dump()
    for section_name, section_values in config_dict.items():
        local_logger.debug("  {}:", section_name.upper())
        if isinstance(section_values, dict):
            for key, value in section_values.items():
                if isinstance(value, Path):
                    value = str(value)
                local_logger.debug("    {}: {}", key.upper(), value)
        else:
            if isinstance(section_values, Path):
                section_values = str(section_values)
            local_logger.debug("    {}", section_values)


# =============================================================================
# THIRD-PARTY LOGGING INTEGRATION
# =============================================================================


class _LoguruForwardingHandler(logging.Handler):
    """Forward stdlib log records to Loguru, keeping the emitting module name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.bind(module=record.name, service=SERVICE_NAME).log(
            level, self.format(record)
        )


def configure_sqlalchemy_logging() -> None:
    """Route SQLAlchemy engine and pool logs through Loguru.

    Note:
        - Only messages SQLAlchemy actually emits are forwarded; enable them
          with ``DATABASE__ECHO=true``
        - Disables propagation to prevent duplicate logs
    """
    for name in ("sqlalchemy.engine", "sqlalchemy.pool"):
        sa_logger = logging.getLogger(name)
        sa_logger.handlers = [_LoguruForwardingHandler()]
        sa_logger.propagate = False
