"""
Page (offset) and cursor (keyset) pagination strategies.

Both strategies compose a :class:`~querypage.query_spec.QuerySpec`, issue
exactly one repository call, and wrap repository failures in
:class:`~querypage.exceptions.StorageError`. Neither retries.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .composer import QueryComposer
from .exceptions import (
    InvalidFilterValueError,
    InvalidSortKeyError,
    PaginationError,
    StorageError,
)
from .fields import EntityFields
from .operators import FilterOperator
from .query_spec import Condition
from .query_string import NextUrlBuilder
from .results import Cursor, CursorResult, PageResult
from .settings import PaginationSettings
from .utils import resolve_attribute

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from .evaluator import OperatorTable
    from .fields import ResolvedField
    from .ports import IPaginationRepository
    from .query_spec import QuerySpec
    from .request import PaginationRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def _fetch(
    operation: str, call: Callable[[QuerySpec], Awaitable[R]], spec: QuerySpec
) -> R:
    try:
        return await call(spec)
    except PaginationError:
        raise
    except Exception as exc:
        logger.warning("Repository %s failed: %s", operation, exc)
        raise StorageError(
            f"Repository {operation} failed: {exc}", operation=operation
        ) from exc


class PagePaginator(Generic[T]):
    """Offset strategy: one counted fetch, ``{data, total}``."""

    def __init__(
        self,
        table: OperatorTable,
        settings: PaginationSettings | None = None,
        composer: QueryComposer | None = None,
    ) -> None:
        self._settings = settings or PaginationSettings()
        self._composer = composer or QueryComposer(table, self._settings)

    async def paginate(
        self,
        request: PaginationRequest,
        repository: IPaginationRepository[T],
        *,
        base_filter: Mapping[str, Any] | None = None,
    ) -> PageResult[T]:
        spec = self._composer.compose(
            request,
            fields=EntityFields(repository.entity_type),
            base_filter=base_filter,
            paged=True,
        )
        rows, total = await _fetch("counted_fetch", repository.counted_fetch, spec)
        return PageResult(data=list(rows), total=total)


class CursorPaginator(Generic[T]):
    """
    Keyset strategy: one bounded fetch, ``{data, cursor, count, next}``.

    The page is considered non-final only when it comes back full
    (``len(data) == take``). That is a size heuristic, not an exact
    "has more" flag: a full last page still yields a ``next`` link, which
    then returns an empty page.
    """

    def __init__(
        self,
        table: OperatorTable,
        settings: PaginationSettings | None = None,
        composer: QueryComposer | None = None,
        url_builder: NextUrlBuilder | None = None,
    ) -> None:
        self._settings = settings or PaginationSettings()
        self._composer = composer or QueryComposer(table, self._settings)
        self._url_builder = url_builder or NextUrlBuilder(self._settings)

    async def paginate(
        self,
        request: PaginationRequest,
        repository: IPaginationRepository[T],
        *,
        path: str,
        base_filter: Mapping[str, Any] | None = None,
    ) -> CursorResult[T]:
        fields = EntityFields(repository.entity_type)
        id_field = self._id_field(fields)
        spec = self._composer.compose(
            request,
            fields=fields,
            base_filter=base_filter,
            boundary=self._boundary(request, fields, id_field),
        )
        rows = list(await _fetch("bounded_fetch", repository.bounded_fetch, spec))

        anchor: Any = None
        next_url: str | None = None
        if rows and len(rows) == request.take:
            anchor = resolve_attribute(rows[-1], id_field.path)
            next_url = self._url_builder.build(
                request, path, anchor, spec.primary_direction
            )
        logger.debug(
            "Cursor page: %d/%d rows, anchor=%r", len(rows), request.take, anchor
        )
        return CursorResult(data=rows, cursor=Cursor(after=anchor), next=next_url)

    def _boundary(
        self,
        request: PaginationRequest,
        fields: EntityFields,
        id_field: ResolvedField,
    ) -> dict[str, Condition]:
        """
        Bound the identifier by the incoming cursor.

        When both bounds are supplied ``more_than`` wins.
        """
        settings = self._settings
        if request.boundary_more_than is not None:
            key, raw, op = (
                settings.more_than_key,
                request.boundary_more_than,
                FilterOperator.MORE_THAN,
            )
        elif request.boundary_less_than is not None:
            key, raw, op = (
                settings.less_than_key,
                request.boundary_less_than,
                FilterOperator.LESS_THAN,
            )
        else:
            return {}

        try:
            value = fields.converter(id_field)(raw)
        except ValueError as exc:
            raise InvalidFilterValueError(key, raw, str(exc)) from exc
        return {id_field.path: Condition(op, value)}

    def _id_field(self, fields: EntityFields) -> ResolvedField:
        """
        Resolve the cursor identifier on the entity.

        Raises:
            InvalidSortKeyError: The entity has no such field, or its values
                cannot be ordered.
        """
        name = self._settings.id_field
        resolved = fields.resolve(name)
        if resolved is None or not fields.is_comparable(resolved.annotation):
            raise InvalidSortKeyError(
                name,
                fields.entity_name,
                fields.available_fields,
                reason="The cursor identifier must be a comparable field.",
            )
        return resolved
