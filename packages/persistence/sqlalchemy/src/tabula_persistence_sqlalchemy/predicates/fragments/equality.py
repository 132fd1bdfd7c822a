"""Equality fragments, dispatched on the column's type family."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import func

from tabula_specifications.coercion import to_text
from tabula_specifications.columns import TypeFamily
from tabula_specifications.operators import FilterOperator

from ...models import CellModel
from ..strategy import FragmentBuilder
from ..utils import has_cell, has_no_cell, projection

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

    from tabula_specifications.resolution import ResolvedCriterion

    from ..strategy import FragmentContext


def equality_operand(criterion: ResolvedCriterion) -> tuple[Any, Any] | None:
    """
    Return ``(stored_column, value)`` to compare, or ``None`` when the
    criterion is a no-op (empty text never means "equals empty string").
    """
    family = criterion.family
    if family is TypeFamily.TEXT:
        if not criterion.value:
            return None
        return func.trim(CellModel.text_value), criterion.value
    if family in (TypeFamily.REFERENCE, TypeFamily.OTHER):
        text = to_text(criterion.value, criterion.column.type)
        if not text:
            return None
        return CellModel.text_value, text
    return projection(family), criterion.value


class EqualsFragment(FragmentBuilder):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.EQUALS

    @property
    def families(self) -> frozenset[TypeFamily]:
        return frozenset(TypeFamily)

    def apply(
        self, criterion: ResolvedCriterion, _context: FragmentContext
    ) -> ColumnElement[bool] | None:
        operand = equality_operand(criterion)
        if operand is None:
            return None
        column, value = operand
        return has_cell(criterion.column.id, column == value)


class NotEqualsFragment(FragmentBuilder):
    """Rows with no cell equal to the value, including rows with no cell."""

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_EQUALS

    @property
    def families(self) -> frozenset[TypeFamily]:
        return frozenset(TypeFamily)

    def apply(
        self, criterion: ResolvedCriterion, _context: FragmentContext
    ) -> ColumnElement[bool] | None:
        operand = equality_operand(criterion)
        if operand is None:
            return None
        column, value = operand
        return has_no_cell(criterion.column.id, column == value)
