"""Reentrant transaction scopes bound to an AsyncSession.

The active scope is recorded in ``session.info`` so every store and service
sharing the session sees the same transaction. The first scope to begin owns
the transaction and decides its outcome; later scopes join it and never commit
or roll back on their own.

Example:
    async with TransactionScope(session):
        await post_store.delete_many(posts)
        await customer_store.delete(customer)
"""

from typing import Self

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from customer_posts.config import get_logger

logger = get_logger(__name__)

ACTIVE_SCOPE_KEY = "active_transaction_scope"


class TransactionScope:
    """Explicit transaction handle for one session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._owner = False
        self._active = False

    @staticmethod
    def current(session: AsyncSession) -> "TransactionScope | None":
        """Return the owning scope currently open on the session, if any."""
        return session.info.get(ACTIVE_SCOPE_KEY)

    @property
    def is_owner(self) -> bool:
        return self._owner

    @property
    def is_active(self) -> bool:
        return self._active

    async def begin(self) -> Self:
        """Open the scope, joining the session's active scope when there is one."""
        if self._active:
            return self

        if self.current(self.session) is None:
            self._owner = True
            self.session.info[ACTIVE_SCOPE_KEY] = self
            # Reads may already have autobegun; only start a transaction if needed
            if not self.session.in_transaction():
                await self.session.connection()
            logger.trace("Transaction scope opened")
        else:
            self._owner = False
            logger.trace("Transaction scope joined active scope")

        self._active = True
        return self

    async def commit(self) -> None:
        """Commit when owning, otherwise just leave the joined scope.

        A failed commit is rolled back before the error propagates.
        """
        if not self._active:
            return
        if not self._owner:
            self._active = False
            return

        try:
            await self.session.commit()
        except Exception:
            logger.warning("Commit failed, rolling back transaction")
            await self.session.rollback()
            raise
        finally:
            self._release()
        logger.trace("Transaction committed")

    async def rollback(self) -> None:
        """Roll back when owning, otherwise just leave the joined scope."""
        if not self._active:
            return
        if not self._owner:
            self._active = False
            return

        try:
            await self.session.rollback()
        finally:
            self._release()
        logger.debug("Transaction rolled back")

    def _release(self) -> None:
        self._active = False
        if self.session.info.get(ACTIVE_SCOPE_KEY) is self:
            del self.session.info[ACTIVE_SCOPE_KEY]

    async def __aenter__(self) -> Self:
        return await self.begin()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        if exc_type is None:
            await self.commit()
            return

        try:
            await self.rollback()
        except SQLAlchemyError:
            # The original exception is re-raised by the context manager protocol
            logger.exception("Rollback failed while handling {}", exc_type.__name__)
