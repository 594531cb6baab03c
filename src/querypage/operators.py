from enum import Enum


class FilterOperator(str, Enum):
    """Operator tokens accepted in ``where__<field>__<operator>`` keys."""

    # Comparison
    EQUAL = "equal"
    NOT = "not"
    MORE_THAN = "more_than"
    MORE_THAN_OR_EQUAL = "more_than_or_equal"
    LESS_THAN = "less_than"
    LESS_THAN_OR_EQUAL = "less_than_or_equal"

    # String patterns
    LIKE = "like"
    I_LIKE = "i_like"

    # Sets and ranges
    BETWEEN = "between"
    IN = "in"

    # Null checks
    IS_NULL = "is_null"


class SortDirection(str, Enum):
    """Direction values accepted in ``order__<field>`` keys."""

    ASC = "ASC"
    DESC = "DESC"
