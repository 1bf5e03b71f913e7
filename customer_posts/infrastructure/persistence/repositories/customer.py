"""Customer persistence: mapper and store."""

from typing import ClassVar

from attrs import define
from sqlalchemy.ext.asyncio import AsyncSession

from customer_posts.domain.entities import Customer
from customer_posts.infrastructure.persistence.database.db_models import DBCustomer
from customer_posts.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    EntityStore,
)


@define(frozen=True, slots=True)
class CustomerMapper(BaseModelMapper[DBCustomer, Customer]):
    """Bidirectional mapper between Customer and DBCustomer."""

    db_class: ClassVar[type] = DBCustomer
    domain_class: ClassVar[type] = Customer
    fields: ClassVar[tuple[str, ...]] = ("name", "email", "phone")


class CustomerRepository(EntityStore[DBCustomer, Customer]):
    """Store for customers."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=DBCustomer, mapper=CustomerMapper())
