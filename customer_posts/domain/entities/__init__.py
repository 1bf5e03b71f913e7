"""Core domain entities for customers and their posts."""

from .customer import Customer
from .post import Post

__all__ = [
    "Customer",
    "Post",
]
