"""Domain repository interfaces and query criteria.

These define the contracts for data access without depending on
infrastructure implementations, following the dependency inversion principle.
"""

from .criteria import (
    OPERATORS,
    Criteria,
    CriteriaLike,
    Criterion,
    Operator,
    as_criteria,
)
from .interfaces import (
    EntityStoreProtocol,
    TransactionScopeProtocol,
    UnitOfWorkProtocol,
)

__all__ = [
    "OPERATORS",
    "Criteria",
    "CriteriaLike",
    "Criterion",
    "EntityStoreProtocol",
    "Operator",
    "TransactionScopeProtocol",
    "UnitOfWorkProtocol",
    "as_criteria",
]
