"""Shared fixtures for the core filtering tests."""

from __future__ import annotations

import pytest

from tabula_specifications import ColumnDescriptor, ColumnSchema


@pytest.fixture
def schema() -> ColumnSchema:
    """One column of every type family, declared out of id order."""
    return ColumnSchema(
        [
            ColumnDescriptor(id=1, name="name", type="text", order=2),
            ColumnDescriptor(id=2, name="age", type="number", order=1),
            ColumnDescriptor(id=3, name="active", type="boolean", order=3),
            ColumnDescriptor(id=4, name="born", type="date", order=0),
            ColumnDescriptor(id=5, name="owner", type="reference", order=4),
            ColumnDescriptor(id=6, name="tags", type="customArray", order=5),
            ColumnDescriptor(id=7, name="meta", type="json", order=6),
            ColumnDescriptor(id=8, name="email", type="email", order=7),
        ]
    )
