"""End-to-end filtered-rows pipeline over the SQLAlchemy cell store."""

from __future__ import annotations

import json
import logging

import pytest

from tabula_filtering import FilteredRowsService, RowQueryParams
from tabula_persistence_sqlalchemy import (
    PredicateBuilder,
    SQLAlchemyRowStore,
    SQLAlchemySchemaLookup,
    StoreCapabilities,
)
from tabula_specifications import TableNotFoundError

TYPES = {"name": "text", "age": "number", "active": "boolean"}


@pytest.fixture
def get_page(session_factory, people_table):
    async def _get_page(query=None, *, table_id=None):
        async with session_factory() as session:
            service = FilteredRowsService(
                SQLAlchemySchemaLookup(session),
                SQLAlchemyRowStore(session),
                PredicateBuilder(StoreCapabilities.for_dialect("sqlite")),
            )
            params = RowQueryParams.from_query(
                table_id or people_table["id"], query or {}
            )
            return await service.get_page(params)

    return _get_page


@pytest.fixture
def filters(people_table):
    """Build the ``filters`` query value from (column, operator, value[, second])."""

    def _filters(*specs):
        items = []
        for column, operator, *values in specs:
            item = {
                "columnId": people_table["columns"].get(column, 999),
                "columnName": column,
                "columnType": TYPES.get(column, "text"),
                "operator": operator,
            }
            if values:
                item["value"] = values[0]
            if len(values) > 1:
                item["secondValue"] = values[1]
            items.append(item)
        return json.dumps(items)

    return _filters


def column_values(body, column_id):
    values = []
    for row in body["data"]:
        cell = next((c for c in row["cells"] if c["columnId"] == column_id), None)
        values.append(cell["value"] if cell else None)
    return values


@pytest.fixture
def names(people_table):
    return lambda body: column_values(body, people_table["columns"]["name"])


async def test_contains_matches_substrings(get_page, filters, names):
    body = await get_page({"filters": filters(("name", "contains", "John"))})
    assert names(body) == ["John Doe", "Bob Johnson"]

    body = await get_page({"filters": filters(("name", "contains", "Doe"))})
    assert names(body) == ["John Doe"]


async def test_starts_with(get_page, filters, names):
    body = await get_page({"filters": filters(("name", "starts_with", "J"))})
    assert names(body) == ["John Doe", "Jane Smith"]


async def test_between(get_page, filters, people_table):
    body = await get_page({"filters": filters(("age", "between", 25, 30))})
    assert column_values(body, people_table["columns"]["age"]) == [25, 30]


async def test_combined_numeric_and_boolean(get_page, filters, people_table):
    body = await get_page(
        {"filters": filters(("age", "greater_than", 25), ("active", "equals", True))}
    )
    assert column_values(body, people_table["columns"]["age"]) == [35]
    assert column_values(body, people_table["columns"]["active"]) == [True]


async def test_pagination_over_numeric_filter(get_page, filters):
    body = await get_page(
        {
            "page": "1",
            "pageSize": "2",
            "filters": filters(("age", "greater_than_or_equal", 25)),
        }
    )
    assert len(body["data"]) == 2
    assert body["pagination"] == {
        "page": 1,
        "pageSize": 2,
        "totalRows": 3,
        "totalPages": 2,
        "hasNext": True,
        "hasPrev": False,
    }


async def test_unknown_column_is_ignored(get_page, filters, names):
    body = await get_page({"filters": filters(("ghost", "equals", "x"))})
    assert names(body) == ["John Doe", "Jane Smith", "Bob Johnson"]
    assert body["filters"]["validFiltersCount"] == 0
    assert body["filters"]["applied"] is True
    assert body["filters"]["columnFilters"][0]["columnId"] == 999


async def test_envelope(get_page, filters):
    body = await get_page(
        {"filters": filters(("age", "less_than", 35)), "globalSearch": " jane "}
    )
    assert len(body["data"]) == 1
    assert body["filters"] == {
        "applied": True,
        "globalSearch": "jane",
        "columnFilters": [
            {
                "columnId": body["filters"]["columnFilters"][0]["columnId"],
                "operator": "less_than",
                "value": 35,
                "secondValue": None,
                "columnName": "age",
                "columnType": "number",
            }
        ],
        "validFiltersCount": 1,
    }
    performance = body["performance"]
    assert performance["filteredRows"] == 1
    assert performance["originalTableSize"] == 3
    assert performance["queryTime"] >= 0


async def test_unfiltered_envelope(get_page):
    body = await get_page()
    assert body["filters"]["applied"] is False
    assert body["filters"]["columnFilters"] == []
    assert body["pagination"]["totalRows"] == 3


async def test_cells_in_declared_order(get_page, people_table):
    body = await get_page()
    columns = people_table["columns"]
    expected = [columns["name"], columns["age"], columns["active"]]
    for row in body["data"]:
        assert [c["columnId"] for c in row["cells"]] == expected
        assert row["cells"][0]["column"]["name"] == "name"


async def test_include_cells_false(get_page, filters):
    body = await get_page(
        {"includeCells": "false", "filters": filters(("name", "contains", "smith"))}
    )
    assert len(body["data"]) == 1
    assert "cells" not in body["data"][0]


async def test_sort_desc(get_page, names):
    body = await get_page({"sortBy": "createdAt", "sortOrder": "desc"})
    assert names(body) == ["Bob Johnson", "Jane Smith", "John Doe"]


async def test_malformed_filters_mean_no_filters(get_page):
    body = await get_page({"filters": "[{oops"})
    assert body["pagination"]["totalRows"] == 3
    assert body["filters"]["applied"] is False


async def test_unknown_table(get_page):
    with pytest.raises(TableNotFoundError):
        await get_page(table_id=12345)


async def test_logs_request_summary(get_page, filters, caplog):
    with caplog.at_level(logging.INFO, logger="tabula_filtering.service"):
        await get_page({"filters": filters(("ghost", "equals", 1))})
    assert "Filtered rows for table" in caplog.text
    assert "1 dropped" in caplog.text
