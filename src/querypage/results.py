"""Result wrappers for the two pagination strategies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .utils import to_jsonable

T = TypeVar("T")


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """Offset-mode page. ``total`` counts every matching row, not just this page."""

    data: list[T] = field(default_factory=list)
    total: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": [to_jsonable(row) for row in self.data],
            "total": self.total,
        }


@dataclass(frozen=True)
class Cursor:
    after: Any = None


@dataclass(frozen=True)
class CursorResult(Generic[T]):
    """
    Cursor-mode page.

    ``cursor.after`` and ``next`` are set only when the page came back
    full, i.e. when more rows may follow.
    """

    data: list[T] = field(default_factory=list)
    cursor: Cursor = field(default_factory=Cursor)
    next: str | None = None

    @property
    def count(self) -> int:
        return len(self.data)

    @property
    def has_more(self) -> bool:
        return self.next is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": [to_jsonable(row) for row in self.data],
            "cursor": {"after": to_jsonable(self.cursor.after)},
            "count": self.count,
            "next": self.next,
        }
