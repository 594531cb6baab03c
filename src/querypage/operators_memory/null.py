"""Null check operator: is_null (``true`` -> IS NULL, ``false`` -> IS NOT NULL)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..evaluator import ConditionOperator
from ..operators import FilterOperator
from ..utils import parse_bool

if TYPE_CHECKING:
    from ..evaluator import Converter


class IsNullOperator(ConditionOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_NULL

    def coerce(self, raw_value: Any, _convert: Converter) -> Any:
        return parse_bool(raw_value)

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return (field_value is None) == bool(condition_value)
