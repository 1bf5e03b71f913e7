"""Serializable query criteria.

Predicates are plain values (field, operator, value) rather than expression
trees so they can be built anywhere, logged, and round-tripped through JSON.
The persistence layer compiles them into SQL clauses.

Example:
    >>> Criteria.of(customer_id=3).where("type", "in", [1, 2])
"""

from collections.abc import Iterator, Mapping
from typing import Any, Literal, get_args

import attrs
from attrs import define, field

from customer_posts.domain.exceptions import InvalidArgumentError

Operator = Literal["eq", "ne", "lt", "le", "gt", "ge", "in", "not_in", "like", "is_null"]

OPERATORS: frozenset[str] = frozenset(get_args(Operator))


def _known_operator(_instance: Any, _attribute: Any, value: str) -> None:
    if value not in OPERATORS:
        raise InvalidArgumentError(
            "operator", f"Unsupported criteria operator {value!r}"
        )


def _non_blank(_instance: Any, _attribute: Any, value: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError("field_name")


@define(frozen=True, slots=True)
class Criterion:
    """A single ``field <operator> value`` condition."""

    field_name: str = field(validator=_non_blank)
    operator: Operator = field(default="eq", validator=_known_operator)
    value: Any = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain mapping."""
        return {"field": self.field_name, "operator": self.operator, "value": self.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Criterion":
        """Rebuild a criterion from :meth:`to_dict` output."""
        return cls(
            field_name=data["field"],
            operator=data.get("operator", "eq"),
            value=data.get("value"),
        )


@define(frozen=True, slots=True)
class Criteria:
    """Conjunction (AND) of criteria. Empty criteria match every row."""

    items: tuple[Criterion, ...] = field(factory=tuple, converter=tuple)

    @classmethod
    def of(cls, **equalities: Any) -> "Criteria":
        """Build equality criteria from keyword arguments."""
        return cls(Criterion(name, "eq", value) for name, value in equalities.items())

    def where(
        self, field_name: str, operator: Operator = "eq", value: Any = None
    ) -> "Criteria":
        """Return new criteria with one more condition appended."""
        return attrs.evolve(
            self, items=(*self.items, Criterion(field_name, operator, value))
        )

    def to_list(self) -> list[dict[str, Any]]:
        """Serialize to a list of plain mappings."""
        return [criterion.to_dict() for criterion in self.items]

    @classmethod
    def from_list(cls, data: list[Mapping[str, Any]]) -> "Criteria":
        """Rebuild criteria from :meth:`to_list` output."""
        return cls(Criterion.from_dict(item) for item in data)

    def __iter__(self) -> Iterator[Criterion]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


# Anything the repositories accept as a predicate
CriteriaLike = Criteria | Mapping[str, Any]


def as_criteria(conditions: CriteriaLike | None) -> Criteria:
    """Normalize a predicate argument, rejecting None."""
    match conditions:
        case None:
            raise InvalidArgumentError("predicate")
        case Criteria():
            return conditions
        case Mapping():
            return Criteria.of(**dict(conditions))
        case _:
            raise InvalidArgumentError(
                "predicate",
                f"Unsupported predicate type {type(conditions).__name__}",
            )
