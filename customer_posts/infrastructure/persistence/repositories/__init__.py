"""Repository layer for database operations with SQLAlchemy 2.0."""

from customer_posts.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    EntityStore,
    ModelMapper,
    StoreFailure,
    compile_criteria,
)
from customer_posts.infrastructure.persistence.repositories.customer import (
    CustomerMapper,
    CustomerRepository,
)
from customer_posts.infrastructure.persistence.repositories.post import (
    PostMapper,
    PostRepository,
)
from customer_posts.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
)

__all__ = [
    "BaseModelMapper",
    "CustomerMapper",
    "CustomerRepository",
    "EntityStore",
    "ModelMapper",
    "PostMapper",
    "PostRepository",
    "StoreFailure",
    "compile_criteria",
    "db_operation",
]
