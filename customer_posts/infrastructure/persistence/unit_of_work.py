"""Database Unit of Work implementation for transaction boundary management.

This module provides the concrete implementation of the UnitOfWork pattern,
handing out stores and services that all share one database session so that
several operations can run in a single transaction.
"""

from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from customer_posts.application.services import (
    CustomerDomainService,
    PostDomainService,
    RepositoryService,
)
from customer_posts.domain.entities import Customer, Post
from customer_posts.infrastructure.persistence.repositories import (
    CustomerRepository,
    PostRepository,
)
from customer_posts.infrastructure.persistence.transaction import TransactionScope

__all__ = ["DatabaseUnitOfWork", "TransactionScope"]


class DatabaseUnitOfWork:
    """Database implementation of the Unit of Work pattern.

    The unit of work automatically commits on successful exit or rolls back on
    exceptions, but also allows explicit commit/rollback control for complex
    business logic.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
        self._committed = False

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context manager with automatic commit/rollback.

        If an exception occurred, automatically rollback the transaction.
        If no exception occurred and commit wasn't called explicitly, commit the transaction.
        """
        if exc_type is not None:
            await self.rollback()
        elif not self._committed:
            await self.commit()

    async def commit(self) -> None:
        """Explicitly commit the current transaction."""
        await self._session.commit()
        self._committed = True

    async def rollback(self) -> None:
        """Explicitly rollback the current transaction."""
        await self._session.rollback()

    def transaction(self) -> TransactionScope:
        """Scope on the shared session; stores and services opened inside join it."""
        return TransactionScope(self._session)

    def get_customer_store(self) -> CustomerRepository:
        """Get customer store using this unit of work's session."""
        return CustomerRepository(self._session)

    def get_post_store(self) -> PostRepository:
        """Get post store using this unit of work's session."""
        return PostRepository(self._session)

    def get_customer_repository_service(self) -> RepositoryService[Customer]:
        return RepositoryService(self.get_customer_store(), "Customer")

    def get_post_repository_service(self) -> RepositoryService[Post]:
        return RepositoryService(self.get_post_store(), "Post")

    def get_post_service(self) -> PostDomainService:
        """Get post service wired to this unit of work's session."""
        return PostDomainService(
            posts=self.get_post_repository_service(),
            customers=self.get_customer_repository_service(),
        )

    def get_customer_service(self) -> CustomerDomainService:
        """Get customer service wired to this unit of work's session."""
        return CustomerDomainService(
            customers=self.get_customer_repository_service(),
            posts=self.get_post_repository_service(),
        )
