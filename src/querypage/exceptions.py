"""
Pagination exception hierarchy with fuzzy-match suggestions.

All exceptions inherit from ``PaginationError`` and provide ``to_dict()``
for API-friendly error responses. ``status_code`` tells the transport layer
whether the failure is a client error or a server-side one.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class PaginationError(Exception):
    """Base exception for all pagination errors."""

    status_code: int = 500

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class PaginationValidationError(PaginationError):
    """Client-supplied pagination or filter input is invalid."""

    status_code = 400


class MalformedFilterKeyError(PaginationValidationError):
    """A ``where__``/``order__`` key does not split into 1 or 2 segments."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f"Filter key {key!r} must split on '__' into 'field' or "
            f"'field__operator' after its prefix"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "MALFORMED_FILTER_KEY",
            "message": str(self),
            "key": self.key,
        }


class InvalidFilterOperatorError(PaginationValidationError):
    """
    Unknown operator token in a ``where__field__operator`` key.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(self, key: str, operator: str, valid_operators: list[str]) -> None:
        self.key = key
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown filter operator {operator!r} in key {key!r}."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid operators: {', '.join(sorted(valid_operators))}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_FILTER_OPERATOR",
            "message": str(self),
            "key": self.key,
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }


class InvalidSortDirectionError(PaginationValidationError):
    """An ``order__*`` value is not exactly ``ASC`` or ``DESC``."""

    def __init__(self, key: str, value: Any) -> None:
        self.key = key
        self.value = value
        super().__init__(
            f"Sort direction for {key!r} must be 'ASC' or 'DESC', got {value!r}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_SORT_DIRECTION",
            "message": str(self),
            "key": self.key,
            "value": self.value,
        }


class InvalidTakeValueError(PaginationValidationError):
    """``take`` is not a positive integer (or exceeds the configured maximum)."""

    def __init__(self, value: Any, reason: str = "must be a positive integer") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid take {value!r}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_TAKE_VALUE",
            "message": str(self),
            "value": self.value,
        }


class InvalidPageValueError(PaginationValidationError):
    """``page`` is not a positive integer."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid page {value!r}: must be a positive integer")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_PAGE_VALUE",
            "message": str(self),
            "value": self.value,
        }


class InvalidFilterValueError(PaginationValidationError):
    """A filter value cannot be coerced for its field or operator."""

    def __init__(self, key: str, value: Any, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value {value!r} for {key!r}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_FILTER_VALUE",
            "message": str(self),
            "key": self.key,
            "value": self.value,
        }


class InvalidFilterFieldError(PaginationValidationError):
    """A ``where__`` key names a field the entity does not have."""

    def __init__(self, key: str, field: str, available_fields: list[str]) -> None:
        self.key = key
        self.field = field
        self.available_fields = available_fields
        self.suggestions = get_close_matches(field, available_fields, n=3, cutoff=0.6)

        message = f"Unknown filter field {field!r} in key {key!r}."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_FILTER_FIELD",
            "message": str(self),
            "key": self.key,
            "field": self.field,
            "suggestions": self.suggestions,
        }


class InvalidSortKeyError(PaginationError):
    """
    Sort key missing from, or not comparable on, the target entity.

    This points at a misconfigured call site rather than bad user input,
    so it is reported as a server error.

    Example error message::

        Invalid sort key 'createdat' on 'Post'.
        Did you mean one of these?
          • createdAt

        Available fields: author, createdAt, id, likeCount, title
    """

    status_code = 500

    def __init__(
        self,
        field: str,
        entity_name: str,
        available_fields: list[str],
        reason: str | None = None,
    ) -> None:
        self.field = field
        self.entity_name = entity_name
        self.available_fields = available_fields
        self.reason = reason
        self.suggestions = get_close_matches(field, available_fields, n=5, cutoff=0.6)
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        lines = [f"Invalid sort key '{self.field}' on '{self.entity_name}'."]
        if self.reason:
            lines.append(self.reason)
        if self.suggestions:
            lines.append("Did you mean one of these?")
            for s in self.suggestions:
                lines.append(f"  • {s}")

        sorted_fields = sorted(self.available_fields)
        preview = ", ".join(sorted_fields[:15])
        if len(sorted_fields) > 15:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_SORT_KEY",
            "field": self.field,
            "entity": self.entity_name,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }


class StorageError(PaginationError):
    """The repository call failed. Wraps the underlying error as ``__cause__``."""

    status_code = 503

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        self.operation = operation
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "STORAGE_ERROR",
            "message": str(self),
            "operation": self.operation,
        }
