"""Database layer: engine, sessions and the relational schema.

Usage:
------
1. Create the schema:
    await init_db()

2. Get a session:
    async with get_session() as session:
        uow = DatabaseUnitOfWork(session)
        ...
"""

from .db_connection import (
    create_db_engine,
    create_session_factory,
    dispose_engine,
    get_engine,
    get_session,
    get_session_factory,
)
from .db_models import DBBase, DBCustomer, DBPost, init_db

__all__ = [
    "DBBase",
    "DBCustomer",
    "DBPost",
    "create_db_engine",
    "create_session_factory",
    "dispose_engine",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_db",
]
