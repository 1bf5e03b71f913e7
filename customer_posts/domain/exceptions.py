"""Domain-level exceptions.

Every business rule violation is expressed as a subclass of ``DomainError`` so
an inbound boundary (HTTP controller, CLI) can catch them uniformly and map
them to its own responses. Failures raised by the relational store are not
wrapped; they surface as the store's own exception types.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class InvalidArgumentError(DomainError, ValueError):
    """A required argument was missing or empty.

    Always raised before the store is touched, so no side effects are possible.
    """

    def __init__(self, argument: str, message: str | None = None) -> None:
        self.argument = argument
        super().__init__(message or f"'{argument}' must not be None or empty")


class EntityNotFoundError(DomainError, LookupError):
    """A referenced entity did not exist at lookup time."""

    def __init__(self, entity_name: str, entity_id: object) -> None:
        self.entity_name = entity_name
        self.entity_id = entity_id
        super().__init__(f"{entity_name} with id {entity_id!r} was not found")


class ValidationError(DomainError):
    """A business rule or invariant was violated."""
