"""Continuation links for cursor pages."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from .operators import SortDirection
from .request import TAKE_KEY
from .settings import PaginationSettings

if TYPE_CHECKING:
    from .request import PaginationRequest


class NextUrlBuilder:
    """
    Rebuild the request URL for the page after *anchor*.

    Every incoming key is carried over verbatim and once, except the two
    boundary keys; exactly one boundary key is appended. Ascending cursors
    continue with ``more_than``, descending ones with ``less_than``.
    """

    def __init__(self, settings: PaginationSettings | None = None) -> None:
        self._settings = settings or PaginationSettings()

    def boundary_key(self, direction: SortDirection) -> str:
        if direction is SortDirection.ASC:
            return self._settings.more_than_key
        return self._settings.less_than_key

    def build(
        self,
        request: PaginationRequest,
        path: str,
        anchor: Any,
        direction: SortDirection,
    ) -> str:
        """Produce the absolute ``next`` URL."""
        settings = self._settings
        params: dict[str, Any] = {
            key: value
            for key, value in request.params
            if key not in settings.boundary_keys
        }
        # continuation links pin the effective page size and direction
        params.setdefault(settings.primary_order_key, direction.value)
        params.setdefault(TAKE_KEY, request.take)
        params[self.boundary_key(direction)] = anchor

        base = f"{settings.base_url}/{path.lstrip('/')}"
        return f"{base}?{urlencode(params)}"
