"""RepositoryService transaction boundaries against an in-memory database."""

import pytest

from customer_posts.domain.entities import Customer, Post
from customer_posts.domain.exceptions import EntityNotFoundError, InvalidArgumentError
from customer_posts.infrastructure.persistence.database import DBCustomer
from customer_posts.infrastructure.persistence.repositories import StoreFailure
from customer_posts.infrastructure.persistence.transaction import TransactionScope

pytestmark = pytest.mark.integration


@pytest.fixture
def customers(uow):
    return uow.get_customer_repository_service()


@pytest.fixture
def posts(uow):
    return uow.get_post_repository_service()


class TestMutationsCommit:
    async def test_create_commits(self, customers, db_session, committed_count):
        created = await customers.create(Customer(name="Ann"))

        assert created.id is not None
        assert TransactionScope.current(db_session) is None
        assert await committed_count(DBCustomer) == 1

    async def test_update_reports_changed_flag(self, customers):
        ann = await customers.create(Customer(name="Ann", phone="1"))

        _, unchanged = await customers.update(ann.id, Customer(name="Ann", phone="1"))
        updated, changed = await customers.update(ann.id, Customer(name="Ann", phone="2"))

        assert unchanged is False
        assert changed is True
        assert updated.phone == "2"
        assert (await customers.find_by_id(ann.id)).phone == "2"

    async def test_update_missing_raises_not_found(self, customers):
        with pytest.raises(EntityNotFoundError):
            await customers.update(41, Customer(name="nobody"))

    async def test_delete_and_delete_many(self, customers, committed_count):
        batch = await customers.add_many([Customer(name=n) for n in "abc"])

        await customers.delete(batch[0])
        await customers.delete_many(batch[1:])

        assert await committed_count(DBCustomer) == 0

    async def test_reads_pass_through(self, customers):
        await customers.add_many([Customer(name="x"), Customer(name="y")])

        assert (await customers.get_by_where({"name": "y"})).name == "y"
        assert len(await customers.get_list_by_where({})) == 2
        assert [c.name async for c in customers.get_all()] == ["x", "y"]


class TestValidation:
    @pytest.mark.parametrize(
        ("method", "args"),
        [
            ("create", (None,)),
            ("update", (None, Customer(name="x"))),
            ("update", (1, None)),
            ("delete", (None,)),
            ("delete_many", ([],)),
            ("delete_many", (None,)),
            ("add_many", ([],)),
            ("add_many", (None,)),
            ("get_by_where", (None,)),
            ("get_list_by_where", (None,)),
            ("find_by_id", (None,)),
        ],
    )
    async def test_rejected_before_store_access(self, customers, db_session, method, args):
        with pytest.raises(InvalidArgumentError):
            await getattr(customers, method)(*args)
        assert not db_session.in_transaction()


class TestAtomicity:
    async def test_failed_create_leaves_store_unchanged(self, posts, post_count):
        with pytest.raises(StoreFailure):
            await posts.create(Post(customer_id=12, body="orphan"))

        assert await post_count() == 0

    async def test_failed_add_many_inserts_nothing(self, customers, posts, post_count):
        ann = await customers.create(Customer(name="Ann"))
        batch = [
            Post(customer_id=ann.id, body="ok"),
            Post(customer_id=ann.id + 100, body="orphan"),
        ]

        with pytest.raises(StoreFailure):
            await posts.add_many(batch)

        assert await post_count() == 0

    async def test_failed_update_keeps_previous_values(self, customers, posts):
        ann = await customers.create(Customer(name="Ann"))
        post = await posts.create(Post(customer_id=ann.id, body="hello"))

        with pytest.raises(StoreFailure):
            await posts.update(post.id, Post(customer_id=ann.id + 50, body="moved"))

        stored = await posts.find_by_id(post.id)
        assert stored.customer_id == ann.id
        assert stored.body == "hello"

    async def test_failed_delete_keeps_row(self, customers, posts, customer_count):
        ann = await customers.create(Customer(name="Ann"))
        await posts.create(Post(customer_id=ann.id, body="pinned"))

        with pytest.raises(StoreFailure):
            await customers.delete(ann)

        assert await customer_count() == 1

    async def test_calls_join_outer_scope(self, uow, customers, customer_count):
        with pytest.raises(RuntimeError):
            async with uow.transaction():
                await customers.create(Customer(name="a"))
                await customers.create(Customer(name="b"))
                raise RuntimeError("abort")

        assert await customer_count() == 0

    async def test_outer_scope_commits_once(self, uow, customers, committed_count):
        async with uow.transaction():
            await customers.create(Customer(name="a"))
            await customers.create(Customer(name="b"))

        assert await committed_count(DBCustomer) == 2
