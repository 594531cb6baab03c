"""Entity types and row builders shared by the test modules."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class Post(BaseModel):
    id: int
    created_at: datetime = Field(alias="createdAt")
    title: str = ""
    author: str = "alice"
    like_count: int = Field(default=0, alias="likeCount")
    tags: list[str] = Field(default_factory=list)


class PostRef(BaseModel):
    id: int
    title: str = ""


class Comment(BaseModel):
    id: int
    created_at: datetime = Field(alias="createdAt")
    post: PostRef
    body: str = ""


def make_post(post_id: int, **extra: object) -> Post:
    data: dict[str, object] = {
        "id": post_id,
        "createdAt": EPOCH + timedelta(minutes=post_id),
        "title": f"Post {post_id}",
    }
    data.update(extra)
    return Post.model_validate(data)


def make_comment(
    comment_id: int, post_id: int, body: str = "", post_title: str = ""
) -> Comment:
    return Comment.model_validate(
        {
            "id": comment_id,
            "createdAt": EPOCH + timedelta(minutes=comment_id),
            "post": {"id": post_id, "title": post_title},
            "body": body,
        }
    )
