"""Async helpers that run CLI commands inside a unit of work."""

import asyncio
from collections.abc import Awaitable, Callable

from customer_posts.infrastructure.persistence.database import (
    dispose_engine,
    get_session_factory,
)
from customer_posts.infrastructure.persistence.unit_of_work import DatabaseUnitOfWork


def run_in_unit_of_work[R](operation: Callable[[DatabaseUnitOfWork], Awaitable[R]]) -> R:
    """Run ``operation`` with a fresh session and unit of work, then dispose the engine.

    The unit of work commits when the operation returns and rolls back if it
    raises; the exception is propagated to the caller.
    """

    async def _run() -> R:
        try:
            async with get_session_factory()() as session:
                async with DatabaseUnitOfWork(session) as uow:
                    return await operation(uow)
        finally:
            await dispose_engine()

    return asyncio.run(_run())
