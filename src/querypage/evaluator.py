"""
Operator table: filter-operator token -> condition strategy.

Each strategy knows how to turn a raw request value into a typed
:class:`~querypage.query_spec.Condition` and how to evaluate that condition
in memory. New operators are added by subclassing ``ConditionOperator``
and registering via ``register()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .exceptions import InvalidFilterOperatorError, InvalidFilterValueError
from .operators import FilterOperator
from .query_spec import Condition

if TYPE_CHECKING:
    from collections.abc import Callable

    Converter = Callable[[Any], Any]


def _identity(value: Any) -> Any:
    return value


class ConditionOperator(ABC):
    """
    Strategy interface for a single filter operator.

    ``coerce`` builds the condition value from the raw request value;
    ``evaluate`` checks a concrete field value against it.
    """

    @property
    @abstractmethod
    def name(self) -> FilterOperator:
        """The operator this strategy handles."""
        ...

    def coerce(self, raw_value: Any, convert: Converter) -> Any:
        """
        Turn the raw request value into the condition value.

        Args:
            raw_value: The value as received (usually a string).
            convert: Coerces a scalar to the target field's type.

        Raises:
            ValueError: If the value cannot be coerced.
        """
        return convert(raw_value)

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """Return True if *field_value* satisfies the condition."""
        ...


class OperatorTable:
    """
    Registry of ConditionOperator instances keyed by FilterOperator.

    Usage::

        table = OperatorTable()
        table.register(EqualOperator())

        condition = table.build("where__likeCount__equal", "equal", "3", int)
        table.evaluate(condition, 3)  # True
    """

    def __init__(self) -> None:
        self._operators: dict[FilterOperator, ConditionOperator] = {}

    # -- registration --------------------------------------------------------

    def register(self, operator: ConditionOperator) -> None:
        """Register an operator strategy instance."""
        self._operators[operator.name] = operator

    def register_all(self, *operators: ConditionOperator) -> None:
        """Register multiple operator strategy instances at once."""
        for op in operators:
            self.register(op)

    def unregister(self, name: FilterOperator) -> None:
        """Remove an operator from the table."""
        self._operators.pop(name, None)

    # -- look-up -------------------------------------------------------------

    def get(self, name: FilterOperator) -> ConditionOperator | None:
        """Return the registered operator or ``None``."""
        return self._operators.get(name)

    def has(self, name: FilterOperator) -> bool:
        return name in self._operators

    @property
    def supported_tokens(self) -> list[str]:
        return sorted(op.value for op in self._operators)

    def resolve(self, key: str, token: str) -> ConditionOperator:
        """
        Return the strategy for *token*.

        Raises:
            InvalidFilterOperatorError: If the token is not registered.
        """
        try:
            name = FilterOperator(token)
        except ValueError:
            name = None
        op = self._operators.get(name) if name is not None else None
        if op is None:
            raise InvalidFilterOperatorError(key, token, self.supported_tokens)
        return op

    # -- building ------------------------------------------------------------

    def build(
        self,
        key: str,
        token: str,
        raw_value: Any,
        convert: Converter | None = None,
    ) -> Condition:
        """
        Build a condition for one ``where__`` key.

        Raises:
            InvalidFilterOperatorError: Unknown operator token.
            InvalidFilterValueError: The value cannot be coerced.
        """
        op = self.resolve(key, token)
        try:
            value = op.coerce(raw_value, convert or _identity)
        except (TypeError, ValueError) as exc:
            raise InvalidFilterValueError(key, raw_value, _first_line(exc)) from exc
        return Condition(op.name, value)

    # -- evaluation ----------------------------------------------------------

    def evaluate(self, condition: Condition, field_value: Any) -> bool:
        """
        Evaluate *condition* against a concrete value.

        Raises:
            ValueError: If the condition's operator is not registered.
        """
        op = self.get(condition.operator)
        if op is None:
            raise ValueError(
                f"Unsupported operator for in-memory evaluation: {condition.operator}"
            )
        return op.evaluate(field_value, condition.value)


def _first_line(exc: Exception) -> str:
    text = str(exc).strip()
    return text.splitlines()[0] if text else exc.__class__.__name__
