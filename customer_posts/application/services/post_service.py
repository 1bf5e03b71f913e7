"""Post domain service.

Validates that posts reference an existing customer and normalizes body and
category before anything is written.
"""

from collections.abc import Sequence

from customer_posts.application.services.repository_service import RepositoryService
from customer_posts.config import get_logger
from customer_posts.domain.entities import Customer, Post
from customer_posts.domain.exceptions import (
    EntityNotFoundError,
    InvalidArgumentError,
    ValidationError,
)
from customer_posts.domain.post_rules import resolve_category, truncate_body

logger = get_logger(__name__)


class PostDomainService:
    """Post operations with customer-existence checks and normalization."""

    def __init__(
        self,
        posts: RepositoryService[Post],
        customers: RepositoryService[Customer],
    ) -> None:
        self.posts = posts
        self.customers = customers

    async def _ensure_customer_exists(self, customer_id: int) -> None:
        if await self.customers.find_by_id(customer_id) is None:
            raise ValidationError(f"customer {customer_id} does not exist")

    @staticmethod
    def _normalize(post: Post) -> Post:
        post.body = truncate_body(post.body)
        post.category = resolve_category(post.type, post.category)
        return post

    async def add_post(self, post: Post) -> Post:
        """Validate, normalize and persist a single post.

        Raises:
            InvalidArgumentError: post is None.
            ValidationError: the referenced customer does not exist.
        """
        if post is None:
            raise InvalidArgumentError("post")

        await self._ensure_customer_exists(post.customer_id)
        created = await self.posts.create(self._normalize(post))

        logger.info(
            "Post added",
            post_id=created.id,
            customer_id=created.customer_id,
            category=created.category,
        )
        return created

    async def create_multiple_posts(self, posts: Sequence[Post]) -> list[Post]:
        """Persist a batch of posts, all or nothing.

        Every post's customer is checked before any insert, so one bad
        reference aborts the whole batch.
        """
        if not posts:
            raise ValidationError("posts must not be empty")

        for post in posts:
            if post is None:
                raise ValidationError("posts must not contain None")
            await self._ensure_customer_exists(post.customer_id)

        created = await self.posts.add_many([self._normalize(post) for post in posts])
        logger.info(f"Added {len(created)} posts")
        return created

    async def update_post(self, post: Post) -> tuple[Post, bool]:
        """Validate, normalize and apply edits to an existing post."""
        if post is None or not post.id:
            raise ValidationError("post id must be set to update a post")

        await self._ensure_customer_exists(post.customer_id)
        updated, changed = await self.posts.update(post.id, self._normalize(post))

        logger.info("Post updated", post_id=updated.id, changed=changed)
        return updated, changed

    async def delete_post(self, post_id: int) -> Post:
        """Delete a post by id.

        Raises:
            ValidationError: post_id is not positive.
            EntityNotFoundError: no post has that id.
        """
        if post_id is None or post_id <= 0:
            raise ValidationError(f"invalid post id {post_id!r}")

        post = await self.posts.find_by_id(post_id)
        if post is None:
            raise EntityNotFoundError("Post", post_id)

        deleted = await self.posts.delete(post)
        logger.info("Post deleted", post_id=post_id)
        return deleted

    async def list_posts(self) -> list[Post]:
        return [post async for post in self.posts.get_all()]

    async def list_posts_for_customer(self, customer_id: int) -> list[Post]:
        return await self.posts.get_list_by_where({"customer_id": customer_id})
