"""Post domain entity.

Pure post representation with zero external dependencies.
"""

from attrs import define, field, validators


@define(slots=True)
class Post:
    """A short text post written by a customer.

    ``type`` is a numeric code that may select a category (see
    ``customer_posts.domain.post_rules``); ``category`` is either derived from
    it or supplied by the caller.
    """

    customer_id: int = field(default=0, validator=validators.instance_of(int))
    body: str | None = field(default=None)
    type: int = field(default=0, validator=validators.instance_of(int))
    category: str | None = field(default=None)

    # Store-generated identity
    id: int | None = field(default=None)
