"""Caller input for one paginated listing."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .exceptions import InvalidPageValueError, InvalidTakeValueError
from .settings import DEFAULT_TAKE, PaginationSettings

if TYPE_CHECKING:
    from collections.abc import Iterable

PAGE_KEY = "page"
TAKE_KEY = "take"


def _pairs(params: Any) -> list[tuple[str, Any]]:
    if hasattr(params, "multi_items"):
        return list(params.multi_items())
    if isinstance(params, Mapping):
        return list(params.items())
    return list(params)


class PaginationRequest(BaseModel):
    """
    Pagination input for a single list request.

    ``params`` keeps every incoming ``(key, value)`` pair verbatim and in
    order; ``where__``/``order__`` keys are parsed from it, and the cursor
    strategy copies it into the ``next`` URL. The typed fields are the
    values the strategies branch on.

    Usage::

        request = PaginationRequest.from_query_params(
            {"take": "10", "order__createdAt": "DESC", "where__title__i_like": "cat"}
        )
    """

    model_config = ConfigDict(frozen=True)

    page: int | None = None
    take: int = DEFAULT_TAKE
    boundary_more_than: Any = None
    boundary_less_than: Any = None
    params: tuple[tuple[str, Any], ...] = ()

    @property
    def is_page_mode(self) -> bool:
        """A present, truthy ``page`` selects offset pagination."""
        return bool(self.page)

    @classmethod
    def from_query_params(
        cls,
        params: Mapping[str, Any] | Iterable[tuple[str, Any]] | Any,
        *,
        settings: PaginationSettings | None = None,
    ) -> PaginationRequest:
        """
        Build a request from raw query parameters.

        Accepts a mapping, ``(key, value)`` pairs, or any object with
        ``multi_items()``. Duplicate keys keep their first position and
        their last value.

        Raises:
            InvalidPageValueError: ``page`` is not an integer.
            InvalidTakeValueError: ``take`` is not an integer.
        """
        settings = settings or PaginationSettings()
        merged: dict[str, Any] = {}
        for key, value in _pairs(params):
            merged[key] = value

        page = merged.get(PAGE_KEY)
        if page in ("", None):
            page = None
        take = merged.get(TAKE_KEY)
        if take in ("", None):
            take = settings.default_take

        try:
            return cls.model_validate(
                {
                    "page": page,
                    "take": take,
                    "boundary_more_than": merged.get(settings.more_than_key) or None,
                    "boundary_less_than": merged.get(settings.less_than_key) or None,
                    "params": tuple(merged.items()),
                }
            )
        except PydanticValidationError as exc:
            locations = {str(err.get("loc", ("__root__",))[0]) for err in exc.errors()}
            if PAGE_KEY in locations:
                raise InvalidPageValueError(page) from exc
            if TAKE_KEY in locations:
                raise InvalidTakeValueError(take) from exc
            raise
