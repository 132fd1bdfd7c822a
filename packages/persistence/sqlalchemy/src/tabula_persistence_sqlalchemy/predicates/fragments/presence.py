"""Presence fragments: does the row hold a value for the column at all."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tabula_specifications.columns import TypeFamily
from tabula_specifications.operators import FilterOperator

from ...models import CellModel
from ..strategy import FragmentBuilder
from ..utils import has_no_cell, has_value

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

    from tabula_specifications.resolution import ResolvedCriterion

    from ..strategy import FragmentContext


class IsEmptyFragment(FragmentBuilder):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_EMPTY

    @property
    def families(self) -> frozenset[TypeFamily]:
        return frozenset(TypeFamily)

    def apply(
        self, criterion: ResolvedCriterion, _context: FragmentContext
    ) -> ColumnElement[bool] | None:
        return has_no_cell(criterion.column.id, CellModel.text_value.is_not(None))


class IsNotEmptyFragment(FragmentBuilder):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_NOT_EMPTY

    @property
    def families(self) -> frozenset[TypeFamily]:
        return frozenset(TypeFamily)

    def apply(
        self, criterion: ResolvedCriterion, _context: FragmentContext
    ) -> ColumnElement[bool] | None:
        return has_value(criterion.column.id)
