"""Comparison operators: equal, not, more_than, less_than and the inclusive variants."""

from __future__ import annotations

import operator
from typing import Any, ClassVar

from ..evaluator import ConditionOperator
from ..operators import FilterOperator


class EqualOperator(ConditionOperator):
    """``where__field`` or ``where__field__equal``: exact match, ``None`` included."""

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.EQUAL

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value == condition_value)


class NotOperator(ConditionOperator):
    """``where__field__not``: anything but the value."""

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value != condition_value)


class OrderedComparison(ConditionOperator):
    """
    Base for the inequality tokens.

    Subclasses set ``token`` and ``compare``. A row without a value never
    matches, the way SQL treats ``NULL > x``.
    """

    token: ClassVar[FilterOperator]
    compare: ClassVar[Any]

    @property
    def name(self) -> FilterOperator:
        return self.token

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(type(self).compare(field_value, condition_value))


class MoreThanOperator(OrderedComparison):
    """``where__field__more_than``, also the ascending cursor bound."""

    token = FilterOperator.MORE_THAN
    compare = operator.gt


class LessThanOperator(OrderedComparison):
    """``where__field__less_than``, also the descending cursor bound."""

    token = FilterOperator.LESS_THAN
    compare = operator.lt


class MoreThanOrEqualOperator(OrderedComparison):
    token = FilterOperator.MORE_THAN_OR_EQUAL
    compare = operator.ge


class LessThanOrEqualOperator(OrderedComparison):
    token = FilterOperator.LESS_THAN_OR_EQUAL
    compare = operator.le
