"""Engine settings: base URL, page-size limits and reserved cursor keys."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .operators import SortDirection

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_TAKE = 20


@dataclass(frozen=True)
class PaginationSettings:
    """
    Immutable engine configuration, injected into the service.

    Attributes:
        protocol: Scheme of the absolute ``next`` URL.
        host: Host (and optional port) of the absolute ``next`` URL.
        default_take: Page size when the request carries no ``take``.
        max_take: Upper bound for ``take``; ``None`` disables the check.
        primary_sort_key: Sort key that always leads the ordering.
        primary_sort_direction: Its direction when the request omits it.
        id_field: Monotonic identifier used as the cursor anchor.
        more_than_key: Reserved boundary key for ascending cursors.
        less_than_key: Reserved boundary key for descending cursors.
    """

    protocol: str = "http"
    host: str = "localhost:3000"
    default_take: int = DEFAULT_TAKE
    max_take: int | None = None
    primary_sort_key: str = "createdAt"
    primary_sort_direction: SortDirection = SortDirection.ASC
    id_field: str = "id"
    more_than_key: str = "where__id__more_than"
    less_than_key: str = "where__id__less_than"

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}"

    @property
    def boundary_keys(self) -> frozenset[str]:
        return frozenset({self.more_than_key, self.less_than_key})

    @property
    def primary_order_key(self) -> str:
        return f"order__{self.primary_sort_key}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PaginationSettings:
        """
        Build settings from ``PROTOCOL``, ``HOST``, ``PAGINATION_DEFAULT_TAKE``
        and ``PAGINATION_MAX_TAKE``; unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        max_take = env.get("PAGINATION_MAX_TAKE")
        return cls(
            protocol=env.get("PROTOCOL") or defaults.protocol,
            host=env.get("HOST") or defaults.host,
            default_take=int(
                env.get("PAGINATION_DEFAULT_TAKE") or defaults.default_take
            ),
            max_take=int(max_take) if max_take else defaults.max_take,
        )
