"""Domain layer - customers, posts and their business rules with no infrastructure dependencies."""

from . import entities, post_rules, repositories
from .entities import Customer, Post
from .exceptions import (
    DomainError,
    EntityNotFoundError,
    InvalidArgumentError,
    ValidationError,
)
from .repositories import Criteria, Criterion

__all__ = [
    # Modules
    "entities",
    "post_rules",
    "repositories",
    # Entities
    "Customer",
    "Post",
    # Criteria
    "Criteria",
    "Criterion",
    # Errors
    "DomainError",
    "EntityNotFoundError",
    "InvalidArgumentError",
    "ValidationError",
]
