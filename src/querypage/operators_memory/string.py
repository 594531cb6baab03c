"""Pattern operators: like, i_like.

Values are SQL ``LIKE`` patterns and are kept verbatim (no type coercion).
``i_like`` callers wrap the raw value in ``%...%`` before building.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from ..evaluator import ConditionOperator
from ..operators import FilterOperator

if TYPE_CHECKING:
    from ..evaluator import Converter


def _sql_pattern_to_regex(pattern: str) -> str:
    """Convert SQL LIKE pattern (``%``, ``_``) to an anchored Python regex."""
    return "^" + re.escape(pattern).replace("%", ".*").replace("_", ".") + "$"


class LikeOperator(ConditionOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.LIKE

    def coerce(self, raw_value: Any, convert: Converter) -> Any:
        return str(raw_value)

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        regex = _sql_pattern_to_regex(str(condition_value))
        return bool(re.match(regex, str(field_value), re.DOTALL))


class ILikeOperator(ConditionOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.I_LIKE

    def coerce(self, raw_value: Any, convert: Converter) -> Any:
        return str(raw_value)

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        regex = _sql_pattern_to_regex(str(condition_value))
        return bool(re.match(regex, str(field_value), re.IGNORECASE | re.DOTALL))
