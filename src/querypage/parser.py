"""FilterParser — ``where__``/``order__`` query keys -> predicates + ordering."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, NamedTuple

from .exceptions import (
    InvalidFilterFieldError,
    InvalidSortDirectionError,
    InvalidSortKeyError,
    MalformedFilterKeyError,
)
from .operators import FilterOperator, SortDirection
from .utils import infer_scalar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .evaluator import OperatorTable
    from .fields import EntityFields
    from .query_spec import Condition

logger = logging.getLogger(__name__)

WHERE_PREFIX = "where__"
ORDER_PREFIX = "order__"
SEPARATOR = "__"


class ParsedFilters(NamedTuple):
    """Accumulated fragments from one parse."""

    predicates: dict[str, Condition]
    ordering: dict[str, SortDirection]


def split_key(key: str, prefix: str) -> list[str]:
    """
    Strip *prefix* and split the remainder on ``__``.

    Raises:
        MalformedFilterKeyError: Unless the key yields one or two non-empty
            segments.
    """
    segments = key[len(prefix) :].split(SEPARATOR)
    if len(segments) not in (1, 2) or not all(segments):
        raise MalformedFilterKeyError(key)
    return segments


def resolve_sort_key(fields: EntityFields | None, field: str) -> str:
    """
    Return the attribute path for sort key *field*.

    Raises:
        InvalidSortKeyError: The field is missing or not comparable.
    """
    if fields is None:
        return field
    resolved = fields.resolve(field)
    if resolved is None:
        raise InvalidSortKeyError(field, fields.entity_name, fields.available_fields)
    if not fields.is_comparable(resolved.annotation):
        raise InvalidSortKeyError(
            field,
            fields.entity_name,
            fields.available_fields,
            reason=f"Type {resolved.annotation!r} is not comparable.",
        )
    return resolved.path


def _target_path(field: str, fields: EntityFields | None) -> str:
    resolved = fields.resolve(field) if fields is not None else None
    return resolved.path if resolved is not None else field


def _overlaps(path: str, protected: str) -> bool:
    """True if *path* is *protected* or sits above or below it."""
    return (
        path == protected
        or protected.startswith(path + ".")
        or path.startswith(protected + ".")
    )


class FilterParser:
    """Parse flat request parameters into typed predicates and ordering."""

    def __init__(self, table: OperatorTable) -> None:
        """
        Initialize FilterParser with the operator table to dispatch to.

        Args:
            table: OperatorTable that builds conditions per operator token.
        """
        if table is None:
            raise ValueError(
                "table parameter is required. "
                "Use build_default_table() from querypage.operators_memory "
                "to create one."
            )
        self._table = table

    def parse(
        self,
        params: Iterable[tuple[str, Any]],
        *,
        fields: EntityFields | None = None,
        protected_paths: frozenset[str] = frozenset(),
        reserved_keys: frozenset[str] = frozenset(),
    ) -> ParsedFilters:
        """
        Return predicates and ordering for every ``where__``/``order__`` key.

        Other keys are ignored. Keys in *reserved_keys* are skipped. A
        ``where__`` key whose field path equals, contains or lies under one
        of *protected_paths* is dropped so caller-supplied scoping cannot be
        overridden; other paths are kept and ANDed with it.
        """
        predicates: dict[str, Condition] = {}
        ordering: dict[str, SortDirection] = {}
        for key, value in params:
            if key in reserved_keys:
                continue
            if key.startswith(WHERE_PREFIX):
                parsed = self._parse_where(key, value, fields, protected_paths)
                if parsed is not None:
                    path, condition = parsed
                    predicates[path] = condition
            elif key.startswith(ORDER_PREFIX):
                path, direction = self._parse_order(key, value, fields)
                ordering[path] = direction
        return ParsedFilters(predicates, ordering)

    def _parse_where(
        self,
        key: str,
        value: Any,
        fields: EntityFields | None,
        protected_paths: frozenset[str],
    ) -> tuple[str, Condition] | None:
        segments = split_key(key, WHERE_PREFIX)
        field = segments[0]
        token = segments[1] if len(segments) == 2 else FilterOperator.EQUAL.value

        path = _target_path(field, fields)
        # `where__post__id` under `post.id`: the operator slot names a sub-field
        if any(p.startswith(path + ".") for p in protected_paths):
            logger.info("Dropping %s: %r is scoped by the caller", key, field)
            return None

        self._table.resolve(key, token)
        if any(_overlaps(path, p) for p in protected_paths):
            logger.info("Dropping %s: %r is scoped by the caller", key, field)
            return None

        path, convert = self._field_target(key, field, fields)
        if token == FilterOperator.I_LIKE.value:
            value = f"%{value}%"
        return path, self._table.build(key, token, value, convert)

    def _parse_order(
        self, key: str, value: Any, fields: EntityFields | None
    ) -> tuple[str, SortDirection]:
        segments = split_key(key, ORDER_PREFIX)
        if len(segments) != 1:
            raise MalformedFilterKeyError(key)
        try:
            direction = SortDirection(value)
        except ValueError as exc:
            raise InvalidSortDirectionError(key, value) from exc
        return resolve_sort_key(fields, segments[0]), direction

    @staticmethod
    def _field_target(
        key: str, field: str, fields: EntityFields | None
    ) -> tuple[str, Callable[[Any], Any]]:
        if fields is None:
            return field, infer_scalar
        resolved = fields.resolve(field)
        if resolved is None:
            raise InvalidFilterFieldError(key, field, fields.available_fields)
        return resolved.path, fields.converter(resolved)
