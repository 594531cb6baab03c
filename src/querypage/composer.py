"""QueryComposer — request + base constraints -> one normalised QuerySpec."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .exceptions import InvalidPageValueError, InvalidTakeValueError
from .operators import FilterOperator
from .parser import FilterParser, resolve_sort_key
from .query_spec import Condition, QuerySpec
from .request import PAGE_KEY, TAKE_KEY
from .settings import PaginationSettings

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .evaluator import OperatorTable
    from .fields import EntityFields
    from .operators import SortDirection
    from .request import PaginationRequest

logger = logging.getLogger(__name__)


class QueryComposer:
    """
    Combines parsed filter fragments with caller-supplied base predicates.

    Merge precedence for predicates, lowest to highest: client ``where__``
    filters, cursor boundary, base predicates. Base predicates therefore
    always survive, which keeps scoping rules such as "comments of this
    post" out of reach of the filter keys. Client filters on other paths,
    including siblings such as ``post.title`` next to ``post.id``, are
    ANDed with them.
    """

    def __init__(
        self,
        table: OperatorTable,
        settings: PaginationSettings | None = None,
        parser: FilterParser | None = None,
    ) -> None:
        self._settings = settings or PaginationSettings()
        self._parser = parser or FilterParser(table)

    def compose(
        self,
        request: PaginationRequest,
        *,
        fields: EntityFields | None = None,
        base_filter: Mapping[str, Any] | None = None,
        boundary: Mapping[str, Condition] | None = None,
        paged: bool = False,
    ) -> QuerySpec:
        """
        Build the QuerySpec for *request*.

        Args:
            request: The incoming pagination request.
            fields: Field lookup for the target entity; enables sort key
                validation and filter value coercion.
            base_filter: Field path -> value (equality) or ``Condition``.
                ANDed unconditionally and never overridden.
            boundary: Cursor bound on the identifier field.
            paged: Offset mode; computes ``offset`` from ``page``.

        Raises:
            InvalidTakeValueError: ``take`` < 1 or above ``max_take``.
            InvalidPageValueError: ``page`` < 1 in offset mode.
            InvalidSortKeyError: A sort key is missing or not comparable.
        """
        take = self._validate_take(request.take)
        offset: int | None = None
        if paged:
            if request.page is None or request.page < 1:
                raise InvalidPageValueError(request.page)
            offset = take * (request.page - 1)

        base = self._base_predicates(base_filter or {}, fields)
        protected = frozenset((*(base_filter or {}), *base))

        parsed = self._parser.parse(
            request.params,
            fields=fields,
            protected_paths=protected,
            reserved_keys=self._settings.boundary_keys | {PAGE_KEY, TAKE_KEY},
        )

        primary = resolve_sort_key(fields, self._settings.primary_sort_key)
        ordering: dict[str, SortDirection] = {
            primary: self._settings.primary_sort_direction
        }
        ordering.update(parsed.ordering)

        spec = QuerySpec(
            predicates={**parsed.predicates, **(boundary or {}), **base},
            ordering=ordering,
            limit=take,
            offset=offset,
        )
        logger.debug("Composed query spec: %s", spec.to_dict())
        return spec

    def _validate_take(self, take: int) -> int:
        if take < 1:
            raise InvalidTakeValueError(take)
        max_take = self._settings.max_take
        if max_take is not None and take > max_take:
            raise InvalidTakeValueError(take, reason=f"must not exceed {max_take}")
        return take

    @staticmethod
    def _base_predicates(
        base_filter: Mapping[str, Any], fields: EntityFields | None
    ) -> dict[str, Condition]:
        base: dict[str, Condition] = {}
        for field, value in base_filter.items():
            resolved = fields.resolve(field) if fields is not None else None
            path = resolved.path if resolved is not None else field
            base[path] = (
                value
                if isinstance(value, Condition)
                else Condition(FilterOperator.EQUAL, value)
            )
        return base
