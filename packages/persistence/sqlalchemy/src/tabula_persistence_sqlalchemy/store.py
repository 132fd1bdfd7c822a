"""
SQLAlchemy row store: count and fetch rows matching a predicate.

Results are returned as read-only :class:`~tabula_specifications.rows.Row`
views; ORM instances never leave this module.  Database failures are
logged and re-raised as :class:`RowStoreError`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import asc, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from tabula_specifications.ordering import RowOrder, SortField
from tabula_specifications.rows import Cell, Row

from .exceptions import RowStoreError
from .models import CellModel, RowModel

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from .predicates import Predicate

logger = logging.getLogger(__name__)

_SORT_COLUMNS: dict[SortField, Any] = {
    SortField.ID: RowModel.id,
    SortField.CREATED_AT: RowModel.created_at,
}


def to_row(model: RowModel, *, include_cells: bool = True) -> Row:
    """Map a loaded ``RowModel`` to its read-only view."""
    cells: tuple[Cell, ...] = ()
    if include_cells:
        cells = tuple(
            Cell(
                column_id=cell.column_id,
                value=cell.value,
                id=cell.id,
                row_id=cell.row_id,
                column=cell.column.to_descriptor() if cell.column else None,
            )
            for cell in model.cells
        )
    return Row(
        id=model.id,
        cells=cells,
        table_id=model.table_id,
        created_at=model.created_at,
    )


class SQLAlchemyRowStore:
    """
    Row store over an ``AsyncSession``.

    Calls are issued sequentially; one session must not run two
    statements at once.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def count(self, predicate: Predicate) -> int:
        stmt = select(func.count()).select_from(RowModel).where(predicate.where)
        return await self._scalar(stmt, "count rows")

    async def count_table(self, table_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(RowModel)
            .where(RowModel.table_id == table_id)
        )
        return await self._scalar(stmt, "count table rows")

    async def fetch(
        self,
        predicate: Predicate,
        *,
        order: RowOrder | None = None,
        offset: int = 0,
        limit: int | None = None,
        include_cells: bool = True,
    ) -> list[Row]:
        order = order or RowOrder()
        column = _SORT_COLUMNS[order.field]
        stmt = (
            select(RowModel)
            .where(predicate.where)
            .order_by(desc(column) if order.descending else asc(column))
            .offset(offset)
        )
        if order.field is not SortField.ID:
            # stable pages when the sort key ties
            stmt = stmt.order_by(asc(RowModel.id))
        if limit is not None:
            stmt = stmt.limit(limit)
        if include_cells:
            # refresh rows already in the identity map so cells are reloaded
            stmt = stmt.options(
                selectinload(RowModel.cells).selectinload(CellModel.column)
            ).execution_options(populate_existing=True)
        try:
            result = await self._session.execute(stmt)
            models: Sequence[RowModel] = result.scalars().all()
        except SQLAlchemyError as e:
            logger.exception("Failed to fetch rows for table %s", predicate.table_id)
            raise RowStoreError(f"Failed to fetch rows: {e}") from e
        return [to_row(m, include_cells=include_cells) for m in models]

    async def _scalar(self, stmt: Select[Any], action: str) -> int:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            logger.exception("Failed to %s", action)
            raise RowStoreError(f"Failed to {action}: {e}") from e
        return int(result.scalar_one())
