"""PaginationService — single entry point for paginated listings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .composer import QueryComposer
from .operators_memory import build_default_table
from .paginators import CursorPaginator, PagePaginator
from .query_string import NextUrlBuilder
from .settings import PaginationSettings

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .evaluator import OperatorTable
    from .ports import IPaginationRepository
    from .request import PaginationRequest
    from .results import CursorResult, PageResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PaginationService(Generic[T]):
    """
    Chooses the page or cursor strategy for a request.

    Feature code calls :meth:`paginate` with its own repository, base
    predicate and path, and never needs to know which strategy ran::

        service = PaginationService(settings=PaginationSettings(host="api.test"))
        result = await service.paginate(
            request,
            comments_repo,
            base_filter={"post.id": post_id},
            path=f"posts/{post_id}/comments",
        )
        return result.to_dict()

    The service holds no per-request state and is safe to share.
    """

    def __init__(
        self,
        table: OperatorTable | None = None,
        settings: PaginationSettings | None = None,
    ) -> None:
        self.settings = settings or PaginationSettings()
        self.table = table or build_default_table()
        composer = QueryComposer(self.table, self.settings)
        self._page: PagePaginator[T] = PagePaginator(
            self.table, self.settings, composer
        )
        self._cursor: CursorPaginator[T] = CursorPaginator(
            self.table, self.settings, composer, NextUrlBuilder(self.settings)
        )

    async def paginate(
        self,
        request: PaginationRequest,
        repository: IPaginationRepository[T],
        *,
        path: str,
        base_filter: Mapping[str, Any] | None = None,
    ) -> PageResult[T] | CursorResult[T]:
        """
        Return a page for *request*.

        A present, truthy ``page`` selects offset pagination; anything else
        selects cursor pagination, which uses *path* to build ``next``.
        """
        if request.is_page_mode:
            logger.debug("Paginating %s by page %s", path, request.page)
            return await self._page.paginate(
                request, repository, base_filter=base_filter
            )
        logger.debug("Paginating %s by cursor", path)
        return await self._cursor.paginate(
            request, repository, path=path, base_filter=base_filter
        )


async def paginate(
    request: PaginationRequest,
    repository: IPaginationRepository[T],
    *,
    path: str,
    base_filter: Mapping[str, Any] | None = None,
    settings: PaginationSettings | None = None,
) -> PageResult[T] | CursorResult[T]:
    """Paginate with a one-off :class:`PaginationService` and the default table."""
    service: PaginationService[T] = PaginationService(settings=settings)
    return await service.paginate(
        request, repository, path=path, base_filter=base_filter
    )
