"""Domain repository interfaces following Clean Architecture principles.

These interfaces define the contracts for data access without depending on
infrastructure implementations, following the dependency inversion principle.
The application services are written against these protocols; the SQLAlchemy
implementations live in ``customer_posts.infrastructure.persistence``.
"""

from collections.abc import AsyncIterator, Awaitable, Sequence
from typing import Any, Protocol, Self

from .criteria import CriteriaLike


class TransactionScopeProtocol(Protocol):
    """Reentrant transaction boundary bound to one session.

    The first scope opened on a session owns the transaction: it commits on
    clean exit and rolls back when an exception escapes. Scopes opened while
    another one is active join it and leave the outcome to the owner.
    """

    @property
    def is_owner(self) -> bool:
        """Whether this scope decides commit/rollback."""
        ...

    @property
    def is_active(self) -> bool:
        """Whether the scope has begun and not yet ended."""
        ...

    async def begin(self) -> Self:
        """Open the scope, joining an already active one if present."""
        ...

    async def commit(self) -> None:
        """Commit (owner) or release (joined) the scope."""
        ...

    async def rollback(self) -> None:
        """Roll back (owner) or release (joined) the scope."""
        ...

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context manager with automatic commit/rollback."""
        ...


class EntityStoreProtocol[TDomainModel](Protocol):
    """Generic persistence contract for one entity type."""

    session: Any
    """Session every read, write and scope of this store goes through."""

    def transaction(self) -> TransactionScopeProtocol:
        """Create a transaction scope on the store's session."""
        ...

    def find_one_by(self, conditions: CriteriaLike) -> Awaitable[TDomainModel | None]:
        """First entity matching the predicate, or None."""
        ...

    def find_by(self, conditions: CriteriaLike) -> Awaitable[list[TDomainModel]]:
        """All entities matching the predicate."""
        ...

    def find_by_id(self, id_: Any) -> Awaitable[TDomainModel | None]:
        """Primary-key lookup."""
        ...

    def get_all(self) -> AsyncIterator[TDomainModel]:
        """Lazily iterate every entity."""
        ...

    def create(self, entity: TDomainModel) -> Awaitable[TDomainModel]:
        """Insert and flush, populating the store-generated identity."""
        ...

    def add_many(self, entities: Sequence[TDomainModel]) -> Awaitable[list[TDomainModel]]:
        """Insert several entities and flush."""
        ...

    def update(
        self, edited: TDomainModel, original: TDomainModel
    ) -> Awaitable[tuple[TDomainModel, bool]]:
        """Copy edited values onto the original and report whether anything changed."""
        ...

    def delete(self, entity: TDomainModel) -> Awaitable[TDomainModel]:
        """Remove and flush."""
        ...

    def delete_many(
        self, entities: Sequence[TDomainModel]
    ) -> Awaitable[list[TDomainModel]]:
        """Remove several entities and flush."""
        ...

    def save_changes(self) -> Awaitable[None]:
        """Flush pending changes without transaction control."""
        ...

    def begin_transaction(self) -> Awaitable[TransactionScopeProtocol]:
        """Open a scope, reusing the one already open on the session."""
        ...

    def commit_transaction(self) -> Awaitable[None]:
        """Commit the open scope; no-op when none is open."""
        ...

    def rollback_transaction(self) -> Awaitable[None]:
        """Roll back the open scope; no-op when none is open."""
        ...


class UnitOfWorkProtocol(Protocol):
    """Unit of Work interface for transaction boundary management.

    Each UnitOfWork wraps one database session and hands out stores and
    services that share it, so several operations can join one transaction.
    """

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context manager with automatic commit/rollback."""
        ...

    async def commit(self) -> None:
        """Explicitly commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Explicitly rollback the current transaction."""
        ...

    def transaction(self) -> TransactionScopeProtocol:
        """Create a transaction scope on the shared session."""
        ...
