"""Tests for QueryComposer: limits, offsets, ordering and merge precedence."""

from __future__ import annotations

import pytest
from factories import Comment, Post

from querypage.composer import QueryComposer
from querypage.evaluator import OperatorTable
from querypage.exceptions import (
    InvalidFilterOperatorError,
    InvalidPageValueError,
    InvalidSortKeyError,
    InvalidTakeValueError,
)
from querypage.fields import EntityFields
from querypage.operators import FilterOperator, SortDirection
from querypage.query_spec import Condition
from querypage.request import PaginationRequest
from querypage.settings import PaginationSettings


@pytest.fixture
def composer(table: OperatorTable) -> QueryComposer:
    return QueryComposer(table)


def _request(**params: str) -> PaginationRequest:
    return PaginationRequest.from_query_params(params)


class TestLimits:
    def test_default_take(self, composer: QueryComposer) -> None:
        spec = composer.compose(_request())
        assert spec.limit == 20
        assert spec.offset is None

    @pytest.mark.parametrize("take", ["0", "-3"])
    def test_non_positive_take(self, composer: QueryComposer, take: str) -> None:
        with pytest.raises(InvalidTakeValueError):
            composer.compose(_request(take=take))

    def test_take_above_max(self, table: OperatorTable) -> None:
        composer = QueryComposer(table, PaginationSettings(max_take=50))
        with pytest.raises(InvalidTakeValueError) as exc_info:
            composer.compose(_request(take="51"))
        assert "50" in exc_info.value.reason

    def test_offset_from_page(self, composer: QueryComposer) -> None:
        spec = composer.compose(_request(page="3", take="5"), paged=True)
        assert spec.limit == 5
        assert spec.offset == 10

    @pytest.mark.parametrize("page", [None, "-1"])
    def test_invalid_page_in_offset_mode(
        self, composer: QueryComposer, page: str | None
    ) -> None:
        params = {} if page is None else {"page": page}
        with pytest.raises(InvalidPageValueError):
            composer.compose(_request(**params), paged=True)


class TestOrdering:
    def test_primary_key_leads(self, composer: QueryComposer) -> None:
        spec = composer.compose(
            _request(order__title="DESC"), fields=EntityFields(Post)
        )
        assert list(spec.ordering.items()) == [
            ("created_at", SortDirection.ASC),
            ("title", SortDirection.DESC),
        ]

    def test_client_direction_overrides_primary(self, composer: QueryComposer) -> None:
        spec = composer.compose(
            _request(order__title="ASC", order__createdAt="DESC"),
            fields=EntityFields(Post),
        )
        assert list(spec.ordering) == ["created_at", "title"]
        assert spec.primary_direction is SortDirection.DESC

    def test_missing_primary_key_on_entity(self, table: OperatorTable) -> None:
        composer = QueryComposer(table, PaginationSettings(primary_sort_key="rank"))
        with pytest.raises(InvalidSortKeyError):
            composer.compose(_request(), fields=EntityFields(Post))


class TestPredicateMerge:
    """Client filters < cursor boundary < base predicates."""

    def test_base_predicate_cannot_be_overridden(
        self, composer: QueryComposer
    ) -> None:
        spec = composer.compose(
            _request(where__post__id="999", where__body__like="%hi%"),
            fields=EntityFields(Comment),
            base_filter={"post.id": 5},
        )
        assert spec.predicates == {
            "body": Condition(FilterOperator.LIKE, "%hi%"),
            "post.id": Condition(FilterOperator.EQUAL, 5),
        }

    def test_sibling_filter_is_anded_with_base_predicate(
        self, composer: QueryComposer
    ) -> None:
        spec = composer.compose(
            _request(**{"where__post.title__like": "dogs%"}),
            fields=EntityFields(Comment),
            base_filter={"post.id": 5},
        )
        assert spec.predicates == {
            "post.title": Condition(FilterOperator.LIKE, "dogs%"),
            "post.id": Condition(FilterOperator.EQUAL, 5),
        }

    def test_unknown_operator_on_base_field_still_raises(
        self, composer: QueryComposer
    ) -> None:
        with pytest.raises(InvalidFilterOperatorError):
            composer.compose(
                _request(where__author__bogus="x"),
                fields=EntityFields(Post),
                base_filter={"author": "a"},
            )

    def test_base_condition_is_kept_as_is(self, composer: QueryComposer) -> None:
        bound = Condition(FilterOperator.LESS_THAN, 100)
        spec = composer.compose(
            _request(where__id__equal="3"),
            fields=EntityFields(Post),
            base_filter={"id": bound},
        )
        assert spec.predicates == {"id": bound}

    def test_boundary_overrides_client_filter(self, composer: QueryComposer) -> None:
        boundary = {"id": Condition(FilterOperator.MORE_THAN, 7)}
        spec = composer.compose(
            _request(where__id__not="2"),
            fields=EntityFields(Post),
            boundary=boundary,
        )
        assert spec.predicates == boundary

    def test_boundary_keys_are_not_parsed_as_filters(
        self, composer: QueryComposer
    ) -> None:
        spec = composer.compose(
            _request(where__id__more_than="3", where__id__less_than="9"),
            fields=EntityFields(Post),
        )
        assert spec.predicates == {}
