"""CustomerDomainService cascade delete and name uniqueness."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from customer_posts.application.services import CustomerDomainService, RepositoryService
from customer_posts.domain.entities import Customer, Post
from customer_posts.domain.exceptions import InvalidArgumentError, ValidationError
from customer_posts.infrastructure.persistence.database import DBCustomer, DBPost
from customer_posts.infrastructure.persistence.repositories import (
    CustomerRepository,
    PostRepository,
)

pytestmark = pytest.mark.integration


@pytest.fixture
def service(uow):
    return uow.get_customer_service()


@pytest.fixture
def post_service(uow):
    return uow.get_post_service()


@pytest.fixture
async def ann_with_posts(service, post_service):
    ann = await service.create_customer(Customer(name="Ann"))
    await post_service.create_multiple_posts(
        [Post(customer_id=ann.id, body=f"post {i}") for i in range(4)]
    )
    return ann


def _failing_customer_delete(service) -> None:
    service.customers.store.delete = AsyncMock(
        side_effect=OperationalError("DELETE", {}, Exception("database is locked"))
    )


class TestDeleteCustomerWithPosts:
    async def test_removes_customer_and_posts(
        self, service, ann_with_posts, committed_count
    ):
        deleted = await service.delete_customer_with_posts(ann_with_posts.id)

        assert deleted.id == ann_with_posts.id
        assert await committed_count(DBCustomer) == 0
        assert await committed_count(DBPost) == 0

    async def test_customer_without_posts(self, service, customer_count):
        lonely = await service.create_customer(Customer(name="Lonely"))

        await service.delete_customer_with_posts(lonely.id)

        assert await customer_count() == 0

    async def test_other_customers_posts_survive(
        self, service, post_service, ann_with_posts, post_count
    ):
        bob = await service.create_customer(Customer(name="Bob"))
        await post_service.add_post(Post(customer_id=bob.id, body="keep me"))

        await service.delete_customer_with_posts(ann_with_posts.id)

        assert await post_count() == 1
        assert (await service.get_customer(bob.id)).name == "Bob"

    async def test_unknown_customer_changes_nothing(
        self, service, ann_with_posts, customer_count, post_count
    ):
        with pytest.raises(ValidationError, match="does not exist"):
            await service.delete_customer_with_posts(999)

        assert await customer_count() == 1
        assert await post_count() == 4

    async def test_atomic_failure_keeps_posts(
        self, service, ann_with_posts, customer_count, post_count
    ):
        _failing_customer_delete(service)

        with pytest.raises(OperationalError):
            await service.delete_customer_with_posts(ann_with_posts.id)

        assert await customer_count() == 1
        assert await post_count() == 4

    async def test_non_atomic_failure_leaves_posts_deleted(
        self, service, ann_with_posts, committed_count
    ):
        _failing_customer_delete(service)

        with pytest.raises(OperationalError):
            await service.delete_customer_with_posts(ann_with_posts.id, atomic=False)

        assert await committed_count(DBCustomer) == 1
        assert await committed_count(DBPost) == 0


class TestCreateAndUpdateCustomer:
    async def test_create_rejects_none(self, service):
        with pytest.raises(InvalidArgumentError):
            await service.create_customer(None)

    async def test_duplicate_name_rejected(self, service, customer_count):
        await service.create_customer(Customer(name="Ann"))

        with pytest.raises(ValidationError, match="already taken"):
            await service.create_customer(Customer(name="Ann", email="other@example.com"))

        assert await customer_count() == 1

    async def test_update_keeps_own_name(self, service):
        ann = await service.create_customer(Customer(name="Ann"))

        updated, changed = await service.update_customer(
            Customer(name="Ann", email="ann@example.com", id=ann.id)
        )

        assert changed is True
        assert updated.email == "ann@example.com"

    async def test_update_rejects_name_of_other_customer(self, service):
        await service.create_customer(Customer(name="Ann"))
        bob = await service.create_customer(Customer(name="Bob"))

        with pytest.raises(ValidationError):
            await service.update_customer(Customer(name="Ann", id=bob.id))

        assert (await service.get_customer(bob.id)).name == "Bob"

    @pytest.mark.parametrize("customer", [None, Customer(name="x"), Customer(name="x", id=0)])
    async def test_update_requires_id(self, service, customer):
        with pytest.raises(ValidationError):
            await service.update_customer(customer)

    async def test_list_and_get(self, service):
        for name in ("Ann", "Bob"):
            await service.create_customer(Customer(name=name))

        everyone = await service.list_customers()

        assert [c.name for c in everyone] == ["Ann", "Bob"]
        assert await service.get_customer(everyone[1].id) == everyone[1]
        assert await service.get_customer(404) is None


class TestConstruction:
    async def test_services_on_different_sessions_rejected(self, db_session, session_factory):
        async with session_factory() as other_session:
            customers = RepositoryService(CustomerRepository(db_session), "Customer")
            posts = RepositoryService(PostRepository(other_session), "Post")

            with pytest.raises(InvalidArgumentError, match="share one session"):
                CustomerDomainService(customers=customers, posts=posts)

    def test_unit_of_work_services_share_session(self, uow):
        service = uow.get_customer_service()

        assert service.customers.store.session is service.posts.store.session
