"""Generic transactional service over an entity store.

Every mutating call runs inside a transaction scope on the store's session:
committed on success, rolled back with the original error re-raised on
failure. When the caller already holds a scope on the same session, the call
joins it and the caller decides the outcome.
"""

from collections.abc import AsyncIterator, Sequence
from typing import Any

from customer_posts.config import get_logger
from customer_posts.domain.exceptions import EntityNotFoundError, InvalidArgumentError
from customer_posts.domain.repositories import (
    CriteriaLike,
    EntityStoreProtocol,
    TransactionScopeProtocol,
)

logger = get_logger(__name__)


class RepositoryService[T]:
    """Transaction boundary around one entity store."""

    def __init__(self, store: EntityStoreProtocol[T], entity_name: str) -> None:
        self.store = store
        self.entity_name = entity_name

    def transaction(self) -> TransactionScopeProtocol:
        """Scope on the shared session for grouping several calls."""
        return self.store.transaction()

    # -------------------------------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------------------------------

    async def create(self, entity: T) -> T:
        if entity is None:
            raise InvalidArgumentError("entity")

        async with self.store.transaction():
            created = await self.store.create(entity)

        logger.debug(f"Created {self.entity_name}", entity_id=created.id)
        return created

    async def update(self, id_: Any, edited: T) -> tuple[T, bool]:
        """Apply edited values to the stored entity with the given id.

        Returns:
            The updated entity and whether any persisted value changed.

        Raises:
            InvalidArgumentError: id or edited entity is None.
            EntityNotFoundError: no entity has that id.
        """
        if id_ is None:
            raise InvalidArgumentError("id")
        if edited is None:
            raise InvalidArgumentError("edited")

        original = await self.store.find_by_id(id_)
        if original is None:
            raise EntityNotFoundError(self.entity_name, id_)

        async with self.store.transaction():
            updated, changed = await self.store.update(edited, original)

        logger.debug(
            f"Updated {self.entity_name}", entity_id=id_, changed=changed
        )
        return updated, changed

    async def delete(self, entity: T) -> T:
        if entity is None:
            raise InvalidArgumentError("entity")

        async with self.store.transaction():
            deleted = await self.store.delete(entity)

        logger.debug(f"Deleted {self.entity_name}", entity_id=deleted.id)
        return deleted

    async def delete_many(self, entities: Sequence[T]) -> list[T]:
        if not entities:
            raise InvalidArgumentError("entities")

        async with self.store.transaction():
            deleted = await self.store.delete_many(entities)

        logger.debug(f"Deleted {len(deleted)} {self.entity_name} entities")
        return deleted

    async def add_many(self, entities: Sequence[T]) -> list[T]:
        """Insert every entity in one transaction, or none of them."""
        if not entities:
            raise InvalidArgumentError("entities")

        async with self.store.transaction():
            added = await self.store.add_many(entities)

        logger.debug(f"Added {len(added)} {self.entity_name} entities")
        return added

    async def save_changes(self) -> None:
        await self.store.save_changes()

    # -------------------------------------------------------------------------
    # READS
    # -------------------------------------------------------------------------

    async def get_by_where(self, conditions: CriteriaLike) -> T | None:
        if conditions is None:
            raise InvalidArgumentError("predicate")
        return await self.store.find_one_by(conditions)

    async def get_list_by_where(self, conditions: CriteriaLike) -> list[T]:
        if conditions is None:
            raise InvalidArgumentError("predicate")
        return await self.store.find_by(conditions)

    async def find_by_id(self, id_: Any) -> T | None:
        if id_ is None:
            raise InvalidArgumentError("id")
        return await self.store.find_by_id(id_)

    def get_all(self) -> AsyncIterator[T]:
        return self.store.get_all()
