"""
Normalised query specification produced by the composer.

``QuerySpec`` is the only thing a repository sees: *what* to match
(``predicates``), *how* to order (``ordering``) and *how much* to return
(``limit`` / ``offset``). It is created fresh per request and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .operators import FilterOperator, SortDirection


@dataclass(frozen=True)
class Condition:
    """A single operator applied to one field, e.g. ``more_than 10``."""

    operator: FilterOperator
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.operator.value, "val": self.value}


@dataclass(frozen=True)
class QuerySpec:
    """
    Immutable container handed to the repository.

    Attributes:
        predicates: Attribute path -> condition. All predicates are ANDed.
        ordering: Attribute path -> direction, in tie-break priority order.
        limit: Maximum number of rows to return.
        offset: Rows to skip; only set in offset (page) mode.
    """

    predicates: dict[str, Condition] = field(default_factory=dict)
    ordering: dict[str, SortDirection] = field(default_factory=dict)
    limit: int | None = None
    offset: int | None = None

    @property
    def primary_direction(self) -> SortDirection:
        """Direction of the leading sort key (``ASC`` when unordered)."""
        for direction in self.ordering.values():
            return direction
        return SortDirection.ASC

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-compatible dictionary."""
        result: dict[str, Any] = {
            "predicates": {k: c.to_dict() for k, c in self.predicates.items()},
            "ordering": {k: d.value for k, d in self.ordering.items()},
        }
        if self.limit is not None:
            result["limit"] = self.limit
        if self.offset is not None:
            result["offset"] = self.offset
        return result
