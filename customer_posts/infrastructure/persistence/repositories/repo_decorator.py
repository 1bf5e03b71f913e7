"""Repository decorator for standardizing DB operations.

This module provides a decorator for repository methods that handles:
- Structured logging with context and timing information
- Error classification so failures are logged at an appropriate level
- Re-raising every failure unchanged, so callers see the root cause

Transaction outcome (commit/rollback) is not decided here; that belongs to
the transaction scope that wraps the call.
"""

from collections.abc import Callable, Coroutine
import functools
import inspect
import time
from typing import Any, ParamSpec, TypeVar

from sqlalchemy.exc import (
    DatabaseError,
    IntegrityError,
    MultipleResultsFound,
    NoResultFound,
    OperationalError,
    SQLAlchemyError,
    TimeoutError,
)

from customer_posts.config import get_logger
from customer_posts.domain.exceptions import DomainError

P = ParamSpec("P")
T = TypeVar("T")

logger = get_logger(__name__)

# Ordered most specific first; first isinstance match wins
_ERROR_LEVELS: tuple[tuple[type[BaseException], str, str], ...] = (
    (DomainError, "DEBUG", "DB operation rejected"),
    (NoResultFound, "DEBUG", "DB record not found"),
    (MultipleResultsFound, "WARNING", "Multiple results found"),
    (IntegrityError, "WARNING", "DB integrity error"),
    (TimeoutError, "ERROR", "DB timeout error"),
    (OperationalError, "ERROR", "DB operational error"),
    (DatabaseError, "ERROR", "DB error"),
    (SQLAlchemyError, "ERROR", "SQLAlchemy error"),
)


def classify_error(error: BaseException) -> tuple[str, str]:
    """Return the (log level, message prefix) used for a failed DB operation."""
    for error_type, level, prefix in _ERROR_LEVELS:
        if isinstance(error, error_type):
            return level, prefix
    return "EXCEPTION", "Unhandled exception in"


def db_operation(operation_name: str | None = None):
    """Decorate repository methods with consistent logging and error handling.

    Args:
        operation_name: Optional name for the operation (defaults to function name)

    Returns:
        A decorator function that wraps async repository methods

    Example:
        @db_operation("find_by_id")
        async def find_by_id(self, id_: int) -> Customer | None:
            ...
    """

    def decorator(
        func: Callable[P, Coroutine[Any, Any, T]],
    ) -> Callable[P, Coroutine[Any, Any, T]]:
        func_name = operation_name or func.__name__

        if not inspect.iscoroutinefunction(func):
            raise TypeError(
                f"db_operation can only be used with async functions, but {func_name} is not async",
            )

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start_time = time.perf_counter()
            repo_name = _repository_name(args)
            context = _build_log_context(kwargs)

            logger.trace(
                f"DB operation starting: {repo_name}.{func_name}",
                operation=func_name,
                **context,
            )

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                exec_time = (time.perf_counter() - start_time) * 1000
                level, prefix = classify_error(e)
                message = f"{prefix}: {repo_name}.{func_name}"
                log_context = {
                    "operation": func_name,
                    "error": str(e),
                    "exec_time_ms": exec_time,
                    **context,
                }
                if level == "EXCEPTION":
                    logger.exception(f"{prefix} {repo_name}.{func_name}", **log_context)
                else:
                    logger.log(level, message, **log_context)
                raise

            exec_time = (time.perf_counter() - start_time) * 1000
            logger.trace(
                f"DB operation completed: {repo_name}.{func_name}",
                operation=func_name,
                exec_time_ms=exec_time,
                **context,
            )
            return result

        return wrapper

    return decorator


def _repository_name(args: tuple[Any, ...]) -> str:
    if not args:
        return "Repository"
    owner = args[0]
    model_class = getattr(owner, "model_class", None)
    if model_class is not None:
        return f"{owner.__class__.__name__}[{model_class.__name__}]"
    return owner.__class__.__name__


def _build_log_context(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Build a context dictionary for logging from function kwargs.

    Args:
        kwargs: Function keyword arguments

    Returns:
        A dictionary with loggable values extracted from kwargs
    """
    id_params = {
        k: v
        for k, v in kwargs.items()
        if k.endswith("_id") and isinstance(v, int | str)
    }

    simple_params = {
        k: v
        for k, v in kwargs.items()
        if (
            not k.startswith("_")
            and isinstance(v, int | str | float | bool)
            and k not in id_params
        )
    }

    return {**simple_params, **id_params}
