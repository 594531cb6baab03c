"""Generic pagination and dynamic filter engine over a repository port."""

from __future__ import annotations

from .composer import QueryComposer
from .evaluator import ConditionOperator, OperatorTable
from .exceptions import (
    InvalidFilterFieldError,
    InvalidFilterOperatorError,
    InvalidFilterValueError,
    InvalidPageValueError,
    InvalidSortDirectionError,
    InvalidSortKeyError,
    InvalidTakeValueError,
    MalformedFilterKeyError,
    PaginationError,
    PaginationValidationError,
    StorageError,
)
from .fields import EntityFields
from .operators import FilterOperator, SortDirection
from .operators_memory import build_default_table
from .paginators import CursorPaginator, PagePaginator
from .parser import FilterParser, ParsedFilters
from .ports import IPaginationRepository
from .query_spec import Condition, QuerySpec
from .query_string import NextUrlBuilder
from .request import PaginationRequest
from .results import Cursor, CursorResult, PageResult
from .service import PaginationService, paginate
from .settings import PaginationSettings

__all__ = [
    # Entry points
    "PaginationService",
    "paginate",
    "PaginationRequest",
    "PaginationSettings",
    # Strategies
    "PagePaginator",
    "CursorPaginator",
    "NextUrlBuilder",
    # Query building
    "FilterParser",
    "ParsedFilters",
    "QueryComposer",
    "QuerySpec",
    "Condition",
    "EntityFields",
    # Operators
    "FilterOperator",
    "SortDirection",
    "ConditionOperator",
    "OperatorTable",
    "build_default_table",
    # Ports and results
    "IPaginationRepository",
    "PageResult",
    "CursorResult",
    "Cursor",
    # Exceptions
    "PaginationError",
    "PaginationValidationError",
    "MalformedFilterKeyError",
    "InvalidFilterOperatorError",
    "InvalidFilterFieldError",
    "InvalidFilterValueError",
    "InvalidSortDirectionError",
    "InvalidSortKeyError",
    "InvalidTakeValueError",
    "InvalidPageValueError",
    "StorageError",
]
