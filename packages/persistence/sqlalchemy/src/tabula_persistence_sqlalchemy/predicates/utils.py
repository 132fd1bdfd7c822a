"""Shared helpers for cell-level fragments."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import and_

from tabula_specifications.columns import TypeFamily

from ..models import CellModel, RowModel

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

_PROJECTIONS: dict[TypeFamily, Any] = {
    TypeFamily.NUMERIC: CellModel.number_value,
    TypeFamily.BOOLEAN: CellModel.bool_value,
    TypeFamily.DATE: CellModel.date_value,
}


def projection(family: TypeFamily) -> Any:
    """The typed cell column that holds values of *family*."""
    return _PROJECTIONS.get(family, CellModel.text_value)


def has_cell(column_id: int, *conditions: Any) -> ColumnElement[bool]:
    """EXISTS a cell of *column_id* in the row satisfying every condition."""
    return RowModel.cells.any(and_(CellModel.column_id == column_id, *conditions))


def has_no_cell(column_id: int, *conditions: Any) -> ColumnElement[bool]:
    """NOT EXISTS a cell of *column_id* in the row satisfying every condition."""
    return ~has_cell(column_id, *conditions)


def has_value(column_id: int) -> ColumnElement[bool]:
    """The row holds a non-null value for *column_id*."""
    return has_cell(column_id, CellModel.text_value.is_not(None))
