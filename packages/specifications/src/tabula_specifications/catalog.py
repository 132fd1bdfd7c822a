"""
OperatorCatalog: which operators are meaningful for which column types.

The operator table is fixed; ``validate`` additionally checks that a
criterion references a known column and carries the values its operator
needs.  Invalid criteria are dropped by callers, never raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .coercion import parse_instant, parse_number
from .columns import TypeFamily
from .operators import PERIOD_OPERATORS, PRESENCE_OPERATORS, RANGE_OPERATORS
from .operators import FilterOperator as Op

if TYPE_CHECKING:
    from collections.abc import Callable

    from .columns import ColumnDescriptor, ColumnSchema, ColumnType
    from .criteria import FilterCriterion

_TEXT_OPERATORS = frozenset(
    {
        Op.CONTAINS,
        Op.NOT_CONTAINS,
        Op.EQUALS,
        Op.NOT_EQUALS,
        Op.STARTS_WITH,
        Op.ENDS_WITH,
        Op.REGEX,
        Op.IS_EMPTY,
        Op.IS_NOT_EMPTY,
    }
)
_NUMERIC_OPERATORS = frozenset(
    {
        Op.EQUALS,
        Op.NOT_EQUALS,
        Op.GREATER_THAN,
        Op.GREATER_THAN_OR_EQUAL,
        Op.LESS_THAN,
        Op.LESS_THAN_OR_EQUAL,
        Op.BETWEEN,
        Op.NOT_BETWEEN,
        Op.IS_EMPTY,
        Op.IS_NOT_EMPTY,
    }
)
_DATE_OPERATORS = frozenset(
    {
        Op.EQUALS,
        Op.NOT_EQUALS,
        Op.BEFORE,
        Op.AFTER,
        Op.BETWEEN,
        Op.NOT_BETWEEN,
        Op.TODAY,
        Op.YESTERDAY,
        Op.THIS_WEEK,
        Op.THIS_MONTH,
        Op.THIS_YEAR,
        Op.IS_EMPTY,
        Op.IS_NOT_EMPTY,
    }
)
_EQUALITY_OPERATORS = frozenset(
    {Op.EQUALS, Op.NOT_EQUALS, Op.IS_EMPTY, Op.IS_NOT_EMPTY}
)

OPERATOR_TABLE: dict[TypeFamily, frozenset[Op]] = {
    TypeFamily.TEXT: _TEXT_OPERATORS,
    TypeFamily.NUMERIC: _NUMERIC_OPERATORS,
    TypeFamily.BOOLEAN: _EQUALITY_OPERATORS,
    TypeFamily.DATE: _DATE_OPERATORS,
    TypeFamily.REFERENCE: _EQUALITY_OPERATORS,
    TypeFamily.OTHER: _EQUALITY_OPERATORS,
}


def _parses(parser: Callable[[object], object], value: object) -> bool:
    try:
        parser(value)
    except (TypeError, ValueError, OverflowError):
        return False
    return True


class OperatorCatalog:
    """Pure lookup of valid operators plus structural criterion checks."""

    def valid_operators(self, column_type: ColumnType | str | None) -> frozenset[Op]:
        return OPERATOR_TABLE[TypeFamily.of(column_type)]

    def is_valid(self, criterion: FilterCriterion, schema: ColumnSchema) -> bool:
        return not self.validate(criterion, schema)

    def validate(self, criterion: FilterCriterion, schema: ColumnSchema) -> list[str]:
        """Return the reasons *criterion* is unusable; empty when valid."""
        column = schema.get(criterion.column_id)
        if column is None:
            return [f"Column with ID {criterion.column_id} not found"]

        op = Op.parse(criterion.operator)
        if op is None or op not in self.valid_operators(column.type):
            return [
                f"Operator '{criterion.operator}' is not compatible "
                f"with column type '{column.type}'"
            ]

        if op in PERIOD_OPERATORS or op in PRESENCE_OPERATORS:
            return []
        return self._validate_values(criterion, column, op)

    # -- value checks --------------------------------------------------------

    def _validate_values(
        self, criterion: FilterCriterion, column: ColumnDescriptor, op: Op
    ) -> list[str]:
        values = [("value", criterion.value)]
        if op in RANGE_OPERATORS:
            values.append(("secondValue", criterion.second_value))

        errors: list[str] = []
        for field, value in values:
            error = self._check_value(column, field, value)
            if error:
                errors.append(error)
        return errors

    @staticmethod
    def _check_value(column: ColumnDescriptor, field: str, value: object) -> str | None:
        if value is None:
            return f"'{field}' is required for column '{column.name}'"
        family = column.family
        if family is TypeFamily.NUMERIC and not _parses(parse_number, value):
            return f"'{field}' must be numeric for column '{column.name}'"
        if family is TypeFamily.DATE and not _parses(parse_instant, value):
            return f"'{field}' must be a valid date for column '{column.name}'"
        return None
