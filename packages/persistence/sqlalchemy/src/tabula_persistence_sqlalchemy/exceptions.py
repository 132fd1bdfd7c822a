"""Exceptions for the SQLAlchemy row store."""

from __future__ import annotations

from tabula_specifications.exceptions import StoreError, TableNotFoundError


class RowStoreError(StoreError):
    """Raised when a count or fetch against the database fails."""


__all__: list[str] = [
    "RowStoreError",
    "TableNotFoundError",
]
