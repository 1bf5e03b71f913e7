"""Post persistence: mapper and store."""

from typing import ClassVar

from attrs import define
from sqlalchemy.ext.asyncio import AsyncSession

from customer_posts.domain.entities import Post
from customer_posts.infrastructure.persistence.database.db_models import DBPost
from customer_posts.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    EntityStore,
)


@define(frozen=True, slots=True)
class PostMapper(BaseModelMapper[DBPost, Post]):
    """Bidirectional mapper between Post and DBPost."""

    db_class: ClassVar[type] = DBPost
    domain_class: ClassVar[type] = Post
    fields: ClassVar[tuple[str, ...]] = ("customer_id", "body", "type", "category")


class PostRepository(EntityStore[DBPost, Post]):
    """Store for posts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=DBPost, mapper=PostMapper())
