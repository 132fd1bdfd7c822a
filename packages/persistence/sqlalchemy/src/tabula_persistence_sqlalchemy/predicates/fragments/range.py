"""Inclusive range fragments.  Bounds are never swapped."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tabula_specifications.columns import TypeFamily
from tabula_specifications.operators import FilterOperator
from tabula_specifications.periods import period_range

from ...models import CellModel
from ..strategy import FragmentBuilder
from ..utils import has_cell, has_no_cell, projection

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

    from tabula_specifications.resolution import ResolvedCriterion

    from ..strategy import FragmentContext

_RANGED = frozenset({TypeFamily.NUMERIC, TypeFamily.DATE})


class BetweenFragment(FragmentBuilder):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.BETWEEN

    @property
    def families(self) -> frozenset[TypeFamily]:
        return _RANGED

    def apply(
        self, criterion: ResolvedCriterion, _context: FragmentContext
    ) -> ColumnElement[bool] | None:
        column = projection(criterion.family)
        return has_cell(
            criterion.column.id,
            column.between(criterion.value, criterion.second_value),
        )


class NotBetweenFragment(FragmentBuilder):
    """Rows with no cell inside the range, including rows with no cell."""

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_BETWEEN

    @property
    def families(self) -> frozenset[TypeFamily]:
        return _RANGED

    def apply(
        self, criterion: ResolvedCriterion, _context: FragmentContext
    ) -> ColumnElement[bool] | None:
        column = projection(criterion.family)
        return has_no_cell(
            criterion.column.id,
            column.between(criterion.value, criterion.second_value),
        )


class PeriodFragment(FragmentBuilder):
    """``today`` / ``yesterday`` / ``this_*``: a range computed from the clock."""

    def __init__(self, operator: FilterOperator) -> None:
        self._operator = operator

    @property
    def name(self) -> FilterOperator:
        return self._operator

    @property
    def families(self) -> frozenset[TypeFamily]:
        return frozenset({TypeFamily.DATE})

    def apply(
        self, criterion: ResolvedCriterion, context: FragmentContext
    ) -> ColumnElement[bool] | None:
        start, end = period_range(self._operator, context.now)
        return has_cell(criterion.column.id, CellModel.date_value.between(start, end))
