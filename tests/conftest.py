import pytest
from sqlalchemy import func, select

from customer_posts.infrastructure.persistence.database import (
    DBCustomer,
    DBPost,
    create_db_engine,
    create_session_factory,
    init_db,
)
from customer_posts.infrastructure.persistence.unit_of_work import DatabaseUnitOfWork

IN_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """In-memory database with a fresh schema per test."""
    engine = create_db_engine(IN_MEMORY_URL)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
async def db_session(session_factory):
    """Provide a database session, closed after the test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def uow(db_session):
    """Unit of work sharing the test session."""
    return DatabaseUnitOfWork(db_session)


@pytest.fixture
def count_rows(db_session):
    """Count persisted rows of a model straight from the database."""

    async def _count(model_class) -> int:
        return await db_session.scalar(select(func.count()).select_from(model_class))

    return _count


@pytest.fixture
def customer_count(count_rows):
    async def _count() -> int:
        return await count_rows(DBCustomer)

    return _count


@pytest.fixture
def post_count(count_rows):
    async def _count() -> int:
        return await count_rows(DBPost)

    return _count


@pytest.fixture
def committed_count(db_session, session_factory):
    """Count rows through a second session, so only committed rows are seen.

    The in-memory engine shares one connection between sessions, so the test
    session must have no open transaction when the reader runs.
    """

    async def _count(model_class) -> int:
        assert not db_session.in_transaction()
        async with session_factory() as reader:
            return await reader.scalar(select(func.count()).select_from(model_class))

    return _count
