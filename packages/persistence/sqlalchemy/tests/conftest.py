"""Shared fixtures: an in-memory cell store and a table seeding helper."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tabula_persistence_sqlalchemy import (
    Base,
    CellModel,
    ColumnModel,
    RowModel,
    TableModel,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    SeedTable = Callable[..., Awaitable[tuple[TableModel, dict[str, ColumnModel]]]]


@pytest.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as sess:
        yield sess


async def seed_table(
    session: AsyncSession,
    columns: list[tuple[str, str]],
    rows: list[dict[str, Any]],
    *,
    name: str = "people",
) -> tuple[TableModel, dict[str, ColumnModel]]:
    """
    Create a table with ``columns`` (name, type) and one row per dict.

    Row ``i`` is created ``i`` minutes after 2024-01-01 00:00 UTC; a key
    missing from a row dict means the row has no cell for that column.
    """
    table = TableModel(name=name)
    session.add(table)
    await session.flush()

    by_name: dict[str, ColumnModel] = {}
    for order, (column_name, column_type) in enumerate(columns):
        column = ColumnModel(
            table_id=table.id, name=column_name, type=column_type, order=order
        )
        session.add(column)
        by_name[column_name] = column
    await session.flush()

    base = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
    for i, values in enumerate(rows):
        row = RowModel(
            table_id=table.id, created_at=base + datetime.timedelta(minutes=i)
        )
        row.cells = [
            CellModel.from_value(by_name[key], value) for key, value in values.items()
        ]
        session.add(row)
    await session.commit()
    session.expunge_all()
    return table, by_name


@pytest.fixture
def seed(session) -> SeedTable:
    async def _seed(columns, rows, **kwargs):
        return await seed_table(session, columns, rows, **kwargs)

    return _seed
