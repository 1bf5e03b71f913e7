"""Normalization rules applied to posts before they are persisted.

Pure functions with zero external dependencies.
"""

# Bodies longer than this are candidates for truncation
BODY_TRUNCATION_THRESHOLD = 20
# Bodies longer than this are cut down to this many characters
BODY_MAX_KEPT_CHARS = 97
ELLIPSIS = "..."

CATEGORY_BY_TYPE: dict[int, str] = {
    1: "Entertainment",
    2: "Politics",
    3: "Sports",
}


def truncate_body(body: str | None) -> str | None:
    """Cap a post body at 100 characters.

    Bodies of up to 97 characters are returned unchanged, whitespace or not;
    longer ones keep their first 97 characters followed by ``"..."``.

    Example:
        >>> len(truncate_body("x" * 150))
        100
    """
    if (
        body is not None
        and len(body) > BODY_TRUNCATION_THRESHOLD
        and len(body) > BODY_MAX_KEPT_CHARS
    ):
        return body[:BODY_MAX_KEPT_CHARS] + ELLIPSIS
    return body


def category_for_type(post_type: int) -> str | None:
    """Return the category a type code selects, or None for unknown codes."""
    return CATEGORY_BY_TYPE.get(post_type)


def resolve_category(post_type: int, current: str | None) -> str | None:
    """Derived category when the type selects one, otherwise ``current``.

    A derived value never clears a caller-supplied category.
    """
    return category_for_type(post_type) or current
