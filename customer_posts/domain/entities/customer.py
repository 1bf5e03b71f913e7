"""Customer domain entity.

Pure customer representation with zero external dependencies.
"""

from attrs import define, field, validators


@define(slots=True)
class Customer:
    """A customer that owns zero or more posts.

    Customers are mutable: the repository layer fills in ``id`` after the
    first flush and copies edited field values onto a loaded instance during
    updates. ``name`` uniqueness is a business rule enforced by the customer
    service, not by the schema.
    """

    name: str = field(default="", validator=validators.instance_of(str))
    email: str | None = field(default=None)
    phone: str | None = field(default=None)

    # Store-generated identity, immutable once assigned
    id: int | None = field(default=None)
