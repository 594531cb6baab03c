"""Shared fixtures for querypage tests."""

from __future__ import annotations

import pytest
from factories import Post, make_post

from querypage import PaginationService, PaginationSettings
from querypage.adapters.memory import InMemoryPaginationRepository
from querypage.operators_memory import build_default_table


@pytest.fixture
def table():
    """Default operator table for building conditions."""
    return build_default_table()


@pytest.fixture
def settings() -> PaginationSettings:
    return PaginationSettings(protocol="https", host="api.test")


@pytest.fixture
def service(settings: PaginationSettings) -> PaginationService[Post]:
    return PaginationService(settings=settings)


@pytest.fixture
def ten_posts() -> InMemoryPaginationRepository[Post]:
    """Posts with ids 1..10, created one minute apart."""
    return InMemoryPaginationRepository(Post, [make_post(i) for i in range(1, 11)])


@pytest.fixture
def three_posts() -> InMemoryPaginationRepository[Post]:
    # inserted out of order; the repository must sort
    return InMemoryPaginationRepository(Post, [make_post(i) for i in (2, 3, 1)])
