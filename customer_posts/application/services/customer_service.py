"""Customer domain service.

Owns the application-level cascade from a customer to its posts and keeps
customer names unique.
"""

from customer_posts.application.services.repository_service import RepositoryService
from customer_posts.config import get_logger
from customer_posts.domain.entities import Customer, Post
from customer_posts.domain.exceptions import InvalidArgumentError, ValidationError
from customer_posts.domain.repositories import Criteria

logger = get_logger(__name__)


class CustomerDomainService:
    """Customer operations, including deletion together with owned posts.

    Both services must sit on the same session. The cascade opens its scope
    through the customer service only, and post deletions join that scope
    because they share its session.
    """

    def __init__(
        self,
        customers: RepositoryService[Customer],
        posts: RepositoryService[Post],
    ) -> None:
        if customers.store.session is not posts.store.session:
            raise InvalidArgumentError(
                "posts", "customer and post services must share one session"
            )
        self.customers = customers
        self.posts = posts

    async def delete_customer_with_posts(
        self, customer_id: int, *, atomic: bool = True
    ) -> Customer:
        """Delete a customer after deleting every post it owns.

        Args:
            customer_id: Customer to delete.
            atomic: Run both deletions in one transaction. With False the posts
                are committed first, so a failure deleting the customer leaves
                the posts gone and the customer in place.

        Returns:
            The deleted customer.

        Raises:
            ValidationError: the customer does not exist.
        """
        if not atomic:
            return await self._delete_customer_with_posts(customer_id)

        async with self.customers.transaction():
            return await self._delete_customer_with_posts(customer_id)

    async def _delete_customer_with_posts(self, customer_id: int) -> Customer:
        customer = await self.customers.find_by_id(customer_id)
        if customer is None:
            raise ValidationError(f"customer {customer_id} does not exist")

        posts = await self.posts.get_list_by_where({"customer_id": customer_id})
        if posts:
            await self.posts.delete_many(posts)

        deleted = await self.customers.delete(customer)
        logger.info(
            "Customer deleted with posts",
            customer_id=customer_id,
            post_count=len(posts),
        )
        return deleted

    async def _ensure_name_available(
        self, name: str, exclude_id: int | None = None
    ) -> None:
        criteria = Criteria.of(name=name)
        if exclude_id is not None:
            criteria = criteria.where("id", "ne", exclude_id)
        if await self.customers.get_by_where(criteria) is not None:
            raise ValidationError(f"customer name {name!r} is already taken")

    async def create_customer(self, customer: Customer) -> Customer:
        """Create a customer with a name no other customer holds."""
        if customer is None:
            raise InvalidArgumentError("customer")

        await self._ensure_name_available(customer.name)
        created = await self.customers.create(customer)

        logger.info("Customer created", customer_id=created.id)
        return created

    async def update_customer(self, customer: Customer) -> tuple[Customer, bool]:
        """Apply edits to an existing customer, keeping names unique."""
        if customer is None or not customer.id:
            raise ValidationError("customer id must be set to update a customer")

        await self._ensure_name_available(customer.name, exclude_id=customer.id)
        updated, changed = await self.customers.update(customer.id, customer)

        logger.info("Customer updated", customer_id=updated.id, changed=changed)
        return updated, changed

    async def list_customers(self) -> list[Customer]:
        return [customer async for customer in self.customers.get_all()]

    async def get_customer(self, customer_id: int) -> Customer | None:
        return await self.customers.find_by_id(customer_id)
