"""Tests for the exception hierarchy and its API payloads."""

from __future__ import annotations

import pytest

from querypage.exceptions import (
    InvalidFilterFieldError,
    InvalidFilterOperatorError,
    InvalidFilterValueError,
    InvalidPageValueError,
    InvalidSortDirectionError,
    InvalidSortKeyError,
    InvalidTakeValueError,
    MalformedFilterKeyError,
    PaginationError,
    PaginationValidationError,
    StorageError,
)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (MalformedFilterKeyError("where__"), "MALFORMED_FILTER_KEY"),
        (
            InvalidFilterOperatorError("where__a__eq", "eq", ["equal"]),
            "INVALID_FILTER_OPERATOR",
        ),
        (InvalidSortDirectionError("order__a", "up"), "INVALID_SORT_DIRECTION"),
        (InvalidTakeValueError(0), "INVALID_TAKE_VALUE"),
        (InvalidPageValueError(-1), "INVALID_PAGE_VALUE"),
        (InvalidFilterValueError("where__a", "x", "bad"), "INVALID_FILTER_VALUE"),
        (InvalidFilterFieldError("where__b", "b", ["a"]), "INVALID_FILTER_FIELD"),
    ],
)
def test_client_errors(error: PaginationError, code: str) -> None:
    assert isinstance(error, PaginationValidationError)
    assert error.status_code == 400
    payload = error.to_dict()
    assert payload["error"] == code
    assert payload["message"] == str(error)


def test_operator_suggestions() -> None:
    err = InvalidFilterOperatorError(
        "where__title__more_thn", "more_thn", ["more_than", "less_than", "like"]
    )
    assert err.suggestions[0] == "more_than"
    assert "Did you mean: more_than" in str(err)
    assert err.to_dict()["valid_operators"] == ["less_than", "like", "more_than"]


def test_sort_key_error_is_server_side() -> None:
    err = InvalidSortKeyError("createdat", "Post", ["id", "createdAt", "title"])
    assert not isinstance(err, PaginationValidationError)
    assert err.status_code == 500
    assert "createdAt" in err.suggestions
    message = str(err)
    assert "Invalid sort key 'createdat' on 'Post'." in message
    assert "Available fields: createdAt, id, title" in message
    assert err.to_dict()["error"] == "INVALID_SORT_KEY"


def test_sort_key_error_reason_is_reported() -> None:
    err = InvalidSortKeyError("tags", "Post", ["tags"], reason="Not comparable.")
    assert "Not comparable." in str(err)


def test_storage_error() -> None:
    err = StorageError("Repository bounded_fetch failed", operation="bounded_fetch")
    assert err.status_code == 503
    assert err.to_dict() == {
        "error": "STORAGE_ERROR",
        "message": "Repository bounded_fetch failed",
        "operation": "bounded_fetch",
    }
