"""SQLAlchemy database models for customers and posts.

This module defines the relational schema using SQLAlchemy 2.0 patterns with
proper type annotations. Posts reference customers through a plain foreign
key with no ORM relationship or store-level cascade; the customer service
deletes a customer's posts itself.
"""

from datetime import UTC, datetime

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    MetaData,
    String,
    Text,
)
from sqlalchemy.ext.asyncio import AsyncAttrs, AsyncEngine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from customer_posts.config import get_logger

logger = get_logger(__name__)

# Define naming convention for constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)


class DBBase(AsyncAttrs, DeclarativeBase):
    """Base class for all database models with identity and timestamps."""

    metadata = metadata

    id: Mapped[int] = mapped_column(primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


class DBCustomer(DBBase):
    """Customer row."""

    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(32))

    __table_args__ = (Index(None, "name"),)


class DBPost(DBBase):
    """Post row owned by a customer."""

    __tablename__ = "posts"

    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id"), nullable=False, index=True
    )
    body: Mapped[str | None] = mapped_column(Text)
    type: Mapped[int] = mapped_column(nullable=False, default=0)
    category: Mapped[str | None] = mapped_column(String(50))


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Initialize database schema.

    Creates all tables if they don't exist. This is a safe operation that
    won't affect existing data.
    """
    from customer_posts.infrastructure.persistence.database.db_connection import (
        get_engine,
    )

    engine = engine or get_engine()

    try:
        async with engine.begin() as conn:
            await conn.run_sync(DBBase.metadata.create_all)
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    else:
        logger.info("Database schema initialization complete")
