"""Fixtures for the filtered-rows pipeline: a seeded in-memory cell store."""

from __future__ import annotations

import datetime
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from tabula_persistence_sqlalchemy import (
    Base,
    CellModel,
    ColumnModel,
    RowModel,
    TableModel,
)

PEOPLE_COLUMNS = [("name", "text"), ("age", "number"), ("active", "boolean")]
PEOPLE = [
    {"active": True, "age": 25, "name": "John Doe"},
    {"active": False, "age": 30, "name": "Jane Smith"},
    {"active": True, "age": 35, "name": "Bob Johnson"},
]


@pytest.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def people_table(session_factory) -> dict[str, Any]:
    """Seed the people table; returns its id and column ids by name."""
    async with session_factory() as session:
        table = TableModel(name="people")
        session.add(table)
        await session.flush()

        columns = {}
        # declared order is the reverse of insertion order
        for order, (name, column_type) in enumerate(reversed(PEOPLE_COLUMNS)):
            column = ColumnModel(
                table_id=table.id,
                name=name,
                type=column_type,
                order=len(PEOPLE_COLUMNS) - 1 - order,
            )
            session.add(column)
            columns[name] = column
        await session.flush()

        base = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
        for i, values in enumerate(PEOPLE):
            row = RowModel(table_id=table.id, created_at=base + datetime.timedelta(hours=i))
            row.cells = [
                CellModel.from_value(columns[key], value) for key, value in values.items()
            ]
            session.add(row)
        await session.commit()
        return {"id": table.id, "columns": {n: c.id for n, c in columns.items()}}
