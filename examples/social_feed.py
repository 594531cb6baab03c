"""Example: paginating posts and a post's comments with PaginationService."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qsl, urlsplit

from pydantic import BaseModel, Field

from querypage import (
    CursorResult,
    PaginationError,
    PaginationRequest,
    PaginationService,
    PaginationSettings,
)
from querypage.adapters import InMemoryPaginationRepository

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


class Post(BaseModel):
    id: int
    created_at: datetime = Field(alias="createdAt")
    title: str


class PostRef(BaseModel):
    id: int


class Comment(BaseModel):
    id: int
    created_at: datetime = Field(alias="createdAt")
    post: PostRef
    body: str


posts = InMemoryPaginationRepository(
    Post,
    [
        Post.model_validate(
            {
                "id": i,
                "createdAt": START + timedelta(hours=i),
                "title": f"Weekend trip #{i}",
            }
        )
        for i in range(1, 8)
    ],
)
comments = InMemoryPaginationRepository(
    Comment,
    [
        Comment.model_validate(
            {
                "id": i,
                "createdAt": START + timedelta(minutes=i),
                "post": {"id": 1 + i % 2},
                "body": f"comment {i}",
            }
        )
        for i in range(1, 10)
    ],
)

service: PaginationService[object] = PaginationService(
    settings=PaginationSettings.from_env()
)


async def example_offset_page() -> None:
    """``page`` selects offset pagination with a total count."""
    request = PaginationRequest.from_query_params({"page": "2", "take": "3"})
    result = await service.paginate(request, posts, path="posts")
    print(json.dumps(result.to_dict(), indent=2))


async def example_cursor_walk() -> None:
    """Follow ``next`` links until the feed is exhausted."""
    request = PaginationRequest.from_query_params(
        {"take": "3", "order__createdAt": "DESC", "where__title__i_like": "trip"}
    )
    while True:
        result = await service.paginate(request, posts, path="posts")
        assert isinstance(result, CursorResult)
        print([post.id for post in result.data], "->", result.next)
        if result.next is None:
            break
        request = PaginationRequest.from_query_params(
            parse_qsl(urlsplit(result.next).query)
        )


async def example_scoped_comments(post_id: int) -> None:
    """The base filter keeps the listing on one post whatever the client sends."""
    request = PaginationRequest.from_query_params({"where__post__id": "999"})
    result = await service.paginate(
        request,
        comments,
        path=f"posts/{post_id}/comments",
        base_filter={"post.id": post_id},
    )
    print([c.body for c in result.data])


async def example_error_payload() -> None:
    request = PaginationRequest.from_query_params({"where__title__contians": "trip"})
    try:
        await service.paginate(request, posts, path="posts")
    except PaginationError as exc:
        print(exc.status_code, exc.to_dict())


async def main() -> None:
    await example_offset_page()
    await example_cursor_walk()
    await example_scoped_comments(post_id=1)
    await example_error_payload()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
