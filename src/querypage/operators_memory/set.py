"""Set and range operators: between, in."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..evaluator import ConditionOperator
from ..operators import FilterOperator
from ..utils import parse_list_value

if TYPE_CHECKING:
    from ..evaluator import Converter


class BetweenOperator(ConditionOperator):
    """Inclusive range over two comma-joined values: ``10,20``."""

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.BETWEEN

    def coerce(self, raw_value: Any, convert: Converter) -> Any:
        bounds = parse_list_value(raw_value)
        if len(bounds) != 2:
            raise ValueError("between expects exactly two comma-separated values")
        return (convert(bounds[0]), convert(bounds[1]))

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        low, high = condition_value
        return bool(low <= field_value <= high)


class InOperator(ConditionOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IN

    def coerce(self, raw_value: Any, convert: Converter) -> Any:
        return tuple(convert(item) for item in parse_list_value(raw_value))

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return field_value in condition_value
