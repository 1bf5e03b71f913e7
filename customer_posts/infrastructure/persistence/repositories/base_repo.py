"""Generic repository layer for database operations with SQLAlchemy 2.0."""

from collections.abc import AsyncIterator, Sequence
import operator
from typing import Any, ClassVar, Protocol

from attrs import define
from sqlalchemy import Select, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from customer_posts.config import get_logger
from customer_posts.domain.exceptions import EntityNotFoundError, InvalidArgumentError
from customer_posts.domain.repositories.criteria import (
    Criteria,
    CriteriaLike,
    Criterion,
    as_criteria,
)
from customer_posts.infrastructure.persistence.database.db_models import DBBase
from customer_posts.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
)
from customer_posts.infrastructure.persistence.transaction import TransactionScope

logger = get_logger(__name__)

# Failures raised by the relational store surface unchanged under this name
StoreFailure = SQLAlchemyError

# -------------------------------------------------------------------------
# MAPPERS
# -------------------------------------------------------------------------


class ModelMapper[TDBModel: DBBase, TDomainModel](Protocol):
    """Protocol for bidirectional mapping between models."""

    def to_domain(self, db_model: TDBModel) -> TDomainModel:
        """Convert database model to domain model."""
        ...

    def to_db(self, domain_model: TDomainModel) -> TDBModel:
        """Convert domain model to database model."""
        ...

    def apply(self, db_model: TDBModel, domain_model: TDomainModel) -> None:
        """Copy non-identity values from a domain model onto a row."""
        ...

    def refresh(self, domain_model: TDomainModel, db_model: TDBModel) -> None:
        """Copy identity and values from a row back onto a domain model."""
        ...


@define(frozen=True, slots=True)
class BaseModelMapper[TDBModel: DBBase, TDomainModel]:
    """Field-list driven mapper shared by every entity.

    Subclasses name the two classes and the non-identity fields they have in
    common; the identity attribute is always ``id``.

    Usage:
        @define(frozen=True, slots=True)
        class CustomerMapper(BaseModelMapper[DBCustomer, Customer]):
            db_class: ClassVar = DBCustomer
            domain_class: ClassVar = Customer
            fields: ClassVar = ("name", "email", "phone")
    """

    db_class: ClassVar[type]
    domain_class: ClassVar[type]
    fields: ClassVar[tuple[str, ...]] = ()

    def values(self, model: Any) -> dict[str, Any]:
        """Non-identity field values of either model."""
        return {name: getattr(model, name) for name in self.fields}

    def to_domain(self, db_model: TDBModel) -> TDomainModel:
        return self.domain_class(id=db_model.id, **self.values(db_model))

    def to_db(self, domain_model: TDomainModel) -> TDBModel:
        db_model = self.db_class(**self.values(domain_model))
        if domain_model.id is not None:
            db_model.id = domain_model.id
        return db_model

    def apply(self, db_model: TDBModel, domain_model: TDomainModel) -> None:
        for name, value in self.values(domain_model).items():
            setattr(db_model, name, value)

    def refresh(self, domain_model: TDomainModel, db_model: TDBModel) -> None:
        domain_model.id = db_model.id
        for name, value in self.values(db_model).items():
            setattr(domain_model, name, value)

    def map_collection(self, db_models: Sequence[TDBModel]) -> list[TDomainModel]:
        """Map a collection of DB models to domain models."""
        return [self.to_domain(db_model) for db_model in db_models]


# -------------------------------------------------------------------------
# CRITERIA COMPILATION
# -------------------------------------------------------------------------

_COMPARISONS = {
    "eq": operator.eq,
    "ne": operator.ne,
    "lt": operator.lt,
    "le": operator.le,
    "gt": operator.gt,
    "ge": operator.ge,
}


def _compile_criterion(column: Any, criterion: Criterion) -> ColumnElement[bool]:
    value = criterion.value
    match criterion.operator:
        case "eq" if value is None:
            return column.is_(None)
        case "ne" if value is None:
            return column.is_not(None)
        case "eq" | "ne" | "lt" | "le" | "gt" | "ge":
            return _COMPARISONS[criterion.operator](column, value)
        case "in" | "not_in":
            if value is None or isinstance(value, str | bytes):
                raise InvalidArgumentError(
                    "value",
                    f"'{criterion.operator}' on {criterion.field_name!r} needs a collection",
                )
            values = list(value)
            return column.in_(values) if criterion.operator == "in" else column.not_in(values)
        case "like":
            return column.like(value)
        case "is_null":
            return column.is_(None) if value in (None, True) else column.is_not(None)
        case _:
            raise InvalidArgumentError(
                "operator", f"Unsupported criteria operator {criterion.operator!r}"
            )


def compile_criteria(
    model_class: type[DBBase], criteria: Criteria
) -> list[ColumnElement[bool]]:
    """Translate criteria into SQL clauses against a model's mapped columns."""
    columns = inspect(model_class).columns
    clauses = []
    for criterion in criteria:
        if criterion.field_name not in columns:
            raise InvalidArgumentError(
                criterion.field_name,
                f"{model_class.__name__} has no field {criterion.field_name!r}",
            )
        column = getattr(model_class, criterion.field_name)
        clauses.append(_compile_criterion(column, criterion))
    return clauses


def _require(value: Any, argument: str) -> None:
    if value is None:
        raise InvalidArgumentError(argument)


# -------------------------------------------------------------------------
# ENTITY STORE
# -------------------------------------------------------------------------


class EntityStore[TDBModel: DBBase, TDomainModel]:
    """Generic store for one entity type on one session.

    Mutating calls flush but never commit; committing belongs to whichever
    transaction scope the caller holds.
    """

    def __init__(
        self,
        session: AsyncSession,
        model_class: type[TDBModel],
        mapper: ModelMapper[TDBModel, TDomainModel],
    ) -> None:
        """Initialize store with session and model mappings."""
        self.session = session
        self.model_class = model_class
        self.mapper = mapper
        logger.debug(
            f"Initialized {self.__class__.__name__} for {model_class.__name__}",
        )

    # -------------------------------------------------------------------------
    # SELECT STATEMENT BUILDERS
    # -------------------------------------------------------------------------

    def select(self, conditions: CriteriaLike | None = None) -> Select[tuple[TDBModel]]:
        """Create a select statement ordered by identity, optionally filtered."""
        stmt = select(self.model_class).order_by(self.model_class.id)
        if conditions is not None:
            stmt = stmt.where(*compile_criteria(self.model_class, as_criteria(conditions)))
        return stmt

    async def _get_row(self, id_: Any) -> TDBModel | None:
        return await self.session.get(self.model_class, id_)

    async def _require_row(self, entity: TDomainModel) -> TDBModel:
        db_model = None if entity.id is None else await self._get_row(entity.id)
        if db_model is None:
            raise EntityNotFoundError(self.model_class.__name__, entity.id)
        return db_model

    # -------------------------------------------------------------------------
    # QUERIES
    # -------------------------------------------------------------------------

    @db_operation("find_one_by")
    async def find_one_by(self, conditions: CriteriaLike) -> TDomainModel | None:
        """First entity matching the conditions, or None."""
        stmt = self.select(as_criteria(conditions)).limit(1)
        db_model = (await self.session.scalars(stmt)).first()
        return None if db_model is None else self.mapper.to_domain(db_model)

    @db_operation("find_by")
    async def find_by(self, conditions: CriteriaLike) -> list[TDomainModel]:
        """All entities matching the conditions."""
        stmt = self.select(as_criteria(conditions))
        result = await self.session.scalars(stmt)
        return self.mapper.map_collection(result.all())

    @db_operation("find_by_id")
    async def find_by_id(self, id_: Any) -> TDomainModel | None:
        """Primary-key lookup."""
        _require(id_, "id")
        db_model = await self._get_row(id_)
        return None if db_model is None else self.mapper.to_domain(db_model)

    async def get_all(self) -> AsyncIterator[TDomainModel]:
        """Iterate every entity; the query runs on first iteration."""
        logger.trace(f"Streaming all {self.model_class.__name__} rows")
        result = await self.session.scalars(self.select())
        for db_model in result:
            yield self.mapper.to_domain(db_model)

    # -------------------------------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------------------------------

    @db_operation("create")
    async def create(self, entity: TDomainModel) -> TDomainModel:
        """Insert and flush; the entity's id is populated in place."""
        _require(entity, "entity")
        db_model = self.mapper.to_db(entity)
        self.session.add(db_model)
        await self.session.flush()
        self.mapper.refresh(entity, db_model)
        return entity

    @db_operation("add_many")
    async def add_many(self, entities: Sequence[TDomainModel]) -> list[TDomainModel]:
        """Insert several entities with one flush."""
        _require(entities, "entities")
        entities = list(entities)
        for entity in entities:
            _require(entity, "entity")

        db_models = [self.mapper.to_db(entity) for entity in entities]
        self.session.add_all(db_models)
        await self.session.flush()

        for entity, db_model in zip(entities, db_models, strict=True):
            self.mapper.refresh(entity, db_model)
        return entities

    @db_operation("update")
    async def update(
        self, edited: TDomainModel, original: TDomainModel
    ) -> tuple[TDomainModel, bool]:
        """Copy edited values onto the original's row.

        Returns:
            The refreshed original and whether any column actually changed.
        """
        _require(edited, "edited")
        _require(original, "original")

        db_model = await self._require_row(original)
        self.mapper.apply(db_model, edited)
        changed = self.session.is_modified(db_model)
        await self.session.flush()

        self.mapper.refresh(original, db_model)
        return original, changed

    @db_operation("delete")
    async def delete(self, entity: TDomainModel) -> TDomainModel:
        """Remove and flush."""
        _require(entity, "entity")
        db_model = await self._require_row(entity)
        await self.session.delete(db_model)
        await self.session.flush()
        return entity

    @db_operation("delete_many")
    async def delete_many(self, entities: Sequence[TDomainModel]) -> list[TDomainModel]:
        """Remove several entities with one flush."""
        _require(entities, "entities")
        entities = list(entities)
        for entity in entities:
            _require(entity, "entity")

        for entity in entities:
            await self.session.delete(await self._require_row(entity))
        await self.session.flush()
        return entities

    @db_operation("save_changes")
    async def save_changes(self) -> None:
        """Flush pending changes without touching the transaction."""
        await self.session.flush()

    # -------------------------------------------------------------------------
    # TRANSACTION PRIMITIVES
    # -------------------------------------------------------------------------

    def transaction(self) -> TransactionScope:
        """New scope on this store's session; use as ``async with``."""
        return TransactionScope(self.session)

    async def begin_transaction(self) -> TransactionScope:
        """Open a scope, reusing the one already open on the session."""
        current = TransactionScope.current(self.session)
        if current is not None:
            return current
        return await TransactionScope(self.session).begin()

    async def commit_transaction(self) -> None:
        """Commit the open scope; no-op without one."""
        current = TransactionScope.current(self.session)
        if current is not None:
            await current.commit()

    async def rollback_transaction(self) -> None:
        """Roll back the open scope; no-op without one."""
        current = TransactionScope.current(self.session)
        if current is not None:
            await current.rollback()
