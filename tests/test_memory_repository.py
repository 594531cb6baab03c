"""Tests for InMemoryPaginationRepository."""

from __future__ import annotations

import pytest
from factories import Comment, Post, make_comment, make_post

from querypage.adapters.memory import InMemoryPaginationRepository
from querypage.operators import FilterOperator, SortDirection
from querypage.ports import IPaginationRepository
from querypage.query_spec import Condition, QuerySpec


def test_satisfies_port() -> None:
    repo = InMemoryPaginationRepository(Post)
    assert isinstance(repo, IPaginationRepository)


@pytest.mark.asyncio
async def test_counted_fetch_counts_all_matches(
    ten_posts: InMemoryPaginationRepository[Post],
) -> None:
    spec = QuerySpec(
        predicates={"id": Condition(FilterOperator.MORE_THAN, 2)},
        ordering={"created_at": SortDirection.ASC},
        limit=3,
        offset=3,
    )
    rows, total = await ten_posts.counted_fetch(spec)
    assert [row.id for row in rows] == [6, 7, 8]
    assert total == 8
    assert ten_posts.calls == [("counted_fetch", spec)]


@pytest.mark.asyncio
async def test_bounded_fetch_sorts_and_limits(
    three_posts: InMemoryPaginationRepository[Post],
) -> None:
    spec = QuerySpec(ordering={"created_at": SortDirection.DESC}, limit=2)
    rows = await three_posts.bounded_fetch(spec)
    assert [row.id for row in rows] == [3, 2]


@pytest.mark.asyncio
async def test_secondary_ordering_breaks_ties() -> None:
    repo = InMemoryPaginationRepository(
        Post,
        [
            make_post(1, author="bob"),
            make_post(2, author="alice"),
            make_post(3, author="bob"),
        ],
    )
    spec = QuerySpec(
        ordering={"author": SortDirection.ASC, "id": SortDirection.DESC}
    )
    rows = await repo.bounded_fetch(spec)
    assert [row.id for row in rows] == [2, 3, 1]


@pytest.mark.asyncio
async def test_nested_predicates() -> None:
    repo = InMemoryPaginationRepository(
        Comment, [make_comment(1, 5), make_comment(2, 999), make_comment(3, 5)]
    )
    spec = QuerySpec(predicates={"post.id": Condition(FilterOperator.EQUAL, 5)})
    rows = await repo.bounded_fetch(spec)
    assert [row.id for row in rows] == [1, 3]


def test_helpers() -> None:
    repo = InMemoryPaginationRepository(Post)
    repo.add(make_post(1))
    assert len(repo) == 1
    repo.clear()
    assert len(repo) == 0
    assert repo.calls == []
