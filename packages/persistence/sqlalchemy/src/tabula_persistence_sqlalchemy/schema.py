"""Column schema lookup backed by the ``tabula_columns`` table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from tabula_specifications.columns import ColumnSchema
from tabula_specifications.exceptions import TableNotFoundError

from .exceptions import RowStoreError
from .models import ColumnModel, TableModel

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class SQLAlchemySchemaLookup:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_schema(self, table_id: int) -> ColumnSchema:
        """
        Load the table's columns.

        Raises:
            TableNotFoundError: If no table has *table_id*.
            RowStoreError: If the database call fails.
        """
        try:
            table = await self._session.get(TableModel, table_id)
            if table is None:
                raise TableNotFoundError(table_id)
            result = await self._session.execute(
                select(ColumnModel).where(ColumnModel.table_id == table_id)
            )
            columns = result.scalars().all()
        except SQLAlchemyError as e:
            logger.exception("Failed to load columns for table %s", table_id)
            raise RowStoreError(f"Failed to load columns: {e}") from e
        return ColumnSchema(c.to_descriptor() for c in columns)
