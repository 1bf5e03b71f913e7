"""Application services - transactional orchestration over the entity stores."""

from .customer_service import CustomerDomainService
from .post_service import PostDomainService
from .repository_service import RepositoryService

__all__ = [
    "CustomerDomainService",
    "PostDomainService",
    "RepositoryService",
]
