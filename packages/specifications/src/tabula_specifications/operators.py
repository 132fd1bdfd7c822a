from enum import Enum


class FilterOperator(str, Enum):
    """Operators a column filter criterion may request."""

    # Text
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    REGEX = "regex"

    # Equality
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"

    # Numeric comparison
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"
    LESS_THAN = "less_than"
    LESS_THAN_OR_EQUAL = "less_than_or_equal"

    # Ranges
    BETWEEN = "between"
    NOT_BETWEEN = "not_between"

    # Dates
    BEFORE = "before"
    AFTER = "after"
    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"
    THIS_YEAR = "this_year"

    # Presence
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"

    @classmethod
    def parse(cls, value: object) -> "FilterOperator | None":
        """Return the operator for *value*, or ``None`` if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


# Period operators resolve against the clock, never against a supplied value.
PERIOD_OPERATORS: frozenset[FilterOperator] = frozenset(
    {
        FilterOperator.TODAY,
        FilterOperator.YESTERDAY,
        FilterOperator.THIS_WEEK,
        FilterOperator.THIS_MONTH,
        FilterOperator.THIS_YEAR,
    }
)

PRESENCE_OPERATORS: frozenset[FilterOperator] = frozenset(
    {FilterOperator.IS_EMPTY, FilterOperator.IS_NOT_EMPTY}
)

RANGE_OPERATORS: frozenset[FilterOperator] = frozenset(
    {FilterOperator.BETWEEN, FilterOperator.NOT_BETWEEN}
)

# Text operators the store narrows by existence only; matched after fetch.
LEXICAL_OPERATORS: frozenset[FilterOperator] = frozenset(
    {
        FilterOperator.CONTAINS,
        FilterOperator.NOT_CONTAINS,
        FilterOperator.STARTS_WITH,
        FilterOperator.ENDS_WITH,
    }
)
