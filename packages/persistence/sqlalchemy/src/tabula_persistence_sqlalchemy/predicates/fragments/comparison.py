"""Ordered comparison fragments for numeric and date columns."""

from __future__ import annotations

import operator as op_module
from typing import TYPE_CHECKING, Any, ClassVar

from tabula_specifications.columns import TypeFamily
from tabula_specifications.operators import FilterOperator

from ..strategy import FragmentBuilder
from ..utils import has_cell, projection

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.sql.elements import ColumnElement

    from tabula_specifications.resolution import ResolvedCriterion

    from ..strategy import FragmentContext

_ORDERED = frozenset({TypeFamily.NUMERIC, TypeFamily.DATE})


class _ComparisonFragment(FragmentBuilder):
    operator: ClassVar[FilterOperator]
    compare: ClassVar[Callable[[Any, Any], Any]]

    @property
    def name(self) -> FilterOperator:
        return self.operator

    @property
    def families(self) -> frozenset[TypeFamily]:
        return _ORDERED

    def apply(
        self, criterion: ResolvedCriterion, _context: FragmentContext
    ) -> ColumnElement[bool] | None:
        column = projection(criterion.family)
        return has_cell(criterion.column.id, type(self).compare(column, criterion.value))


class GreaterThanFragment(_ComparisonFragment):
    operator = FilterOperator.GREATER_THAN
    compare = op_module.gt


class GreaterThanOrEqualFragment(_ComparisonFragment):
    operator = FilterOperator.GREATER_THAN_OR_EQUAL
    compare = op_module.ge


class LessThanFragment(_ComparisonFragment):
    operator = FilterOperator.LESS_THAN
    compare = op_module.lt


class LessThanOrEqualFragment(_ComparisonFragment):
    operator = FilterOperator.LESS_THAN_OR_EQUAL
    compare = op_module.le


class BeforeFragment(_ComparisonFragment):
    operator = FilterOperator.BEFORE
    compare = op_module.lt

    @property
    def families(self) -> frozenset[TypeFamily]:
        return frozenset({TypeFamily.DATE})


class AfterFragment(_ComparisonFragment):
    operator = FilterOperator.AFTER
    compare = op_module.gt

    @property
    def families(self) -> frozenset[TypeFamily]:
        return frozenset({TypeFamily.DATE})
