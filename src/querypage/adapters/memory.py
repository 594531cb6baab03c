"""InMemoryPaginationRepository — list-backed fake for unit tests and examples."""

from __future__ import annotations

from functools import cmp_to_key
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..operators import SortDirection
from ..operators_memory import build_default_table
from ..utils import resolve_attribute

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..evaluator import OperatorTable
    from ..query_spec import QuerySpec

T = TypeVar("T")


def _compare(left: Any, right: Any) -> int:
    # None sorts first, like NULLS FIRST on an ascending index
    if left is None or right is None:
        return (left is not None) - (right is not None)
    return (left > right) - (left < right)


class InMemoryPaginationRepository(Generic[T]):
    """In-memory implementation of ``IPaginationRepository[T]``.

    Stores rows in insertion order and evaluates ``QuerySpec`` predicates
    through the same :class:`~querypage.evaluator.OperatorTable` the
    parser builds conditions with.
    """

    def __init__(
        self,
        entity_type: type[T],
        rows: Iterable[T] = (),
        *,
        table: OperatorTable | None = None,
    ) -> None:
        self.entity_type = entity_type
        self._rows: list[T] = list(rows)
        self._table = table or build_default_table()
        self.calls: list[tuple[str, QuerySpec]] = []

    async def counted_fetch(self, spec: QuerySpec) -> tuple[list[T], int]:
        self.calls.append(("counted_fetch", spec))
        matches = self._select(spec)
        return self._slice(matches, spec), len(matches)

    async def bounded_fetch(self, spec: QuerySpec) -> list[T]:
        self.calls.append(("bounded_fetch", spec))
        return self._slice(self._select(spec), spec)

    # ── Internals ────────────────────────────────────────────────

    def _matches(self, row: T, spec: QuerySpec) -> bool:
        return all(
            self._table.evaluate(condition, resolve_attribute(row, path))
            for path, condition in spec.predicates.items()
        )

    def _select(self, spec: QuerySpec) -> list[T]:
        matches = [row for row in self._rows if self._matches(row, spec)]

        def compare_rows(a: T, b: T) -> int:
            for path, direction in spec.ordering.items():
                result = _compare(
                    resolve_attribute(a, path), resolve_attribute(b, path)
                )
                if result:
                    return -result if direction is SortDirection.DESC else result
            return 0

        return sorted(matches, key=cmp_to_key(compare_rows))

    @staticmethod
    def _slice(rows: list[T], spec: QuerySpec) -> list[T]:
        start = spec.offset or 0
        end = start + spec.limit if spec.limit is not None else None
        return rows[start:end]

    # ── Test helpers ─────────────────────────────────────────────

    def add(self, row: T) -> None:
        self._rows.append(row)

    def clear(self) -> None:
        self._rows.clear()
        self.calls.clear()

    def __len__(self) -> int:
        return len(self._rows)
