"""IPaginationRepository — storage port consumed by the paginators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from .query_spec import QuerySpec

T = TypeVar("T")


@runtime_checkable
class IPaginationRepository(Protocol[T]):
    """
    Read-side repository interface for paginated listings.

    Implementations translate a :class:`~querypage.query_spec.QuerySpec`
    into their backend's query language. ``entity_type`` is the row type
    they return; the engine introspects it to validate sort keys and
    coerce filter values::

        rows, total = await repo.counted_fetch(spec)   # offset mode
        rows = await repo.bounded_fetch(spec)          # cursor mode
    """

    entity_type: type[T]

    async def counted_fetch(self, spec: QuerySpec) -> tuple[list[T], int]:
        """Return one page of rows plus the count of all matching rows."""
        ...

    async def bounded_fetch(self, spec: QuerySpec) -> list[T]:
        """Return at most ``spec.limit`` rows in ``spec.ordering`` order."""
        ...
