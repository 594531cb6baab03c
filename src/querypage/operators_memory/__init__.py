"""
Built-in condition operators.

Provides concrete ConditionOperator subclasses for each FilterOperator
and a factory function to create operator tables.

Usage::

    from querypage.operators_memory import build_default_table

    table = build_default_table()
    condition = table.build("where__title__like", "like", "Hello%")
"""

from __future__ import annotations

from ..evaluator import OperatorTable
from .null import IsNullOperator
from .set import BetweenOperator, InOperator
from .standard import (
    EqualOperator,
    LessThanOperator,
    LessThanOrEqualOperator,
    MoreThanOperator,
    MoreThanOrEqualOperator,
    NotOperator,
)
from .string import ILikeOperator, LikeOperator


def build_default_table() -> OperatorTable:
    """
    Create a table with all built-in operators.

    Returns a fresh instance on every call so callers can register or
    unregister operators without affecting each other.
    """
    table = OperatorTable()
    table.register_all(
        # Comparison
        EqualOperator(),
        NotOperator(),
        MoreThanOperator(),
        MoreThanOrEqualOperator(),
        LessThanOperator(),
        LessThanOrEqualOperator(),
        # Patterns
        LikeOperator(),
        ILikeOperator(),
        # Sets and ranges
        BetweenOperator(),
        InOperator(),
        # Null
        IsNullOperator(),
    )
    return table


__all__ = [
    "build_default_table",
    "OperatorTable",
]
