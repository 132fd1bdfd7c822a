"""
Exception hierarchy for the tabula toolkit.

All exceptions inherit from ``TabulaError`` and provide ``to_dict()``
for API-friendly error responses.  Invalid filter criteria are *not*
errors: they are dropped during resolution (see :mod:`.resolution`).
"""

from __future__ import annotations

from typing import Any


class TabulaError(Exception):
    """Root exception for the entire tabula toolkit."""

    code = "INTERNAL_ERROR"

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "code": self.code,
        }


class RequestValidationError(TabulaError):
    """The request parameters do not match the expected shape.

    Carries structured errors: ``[{field, message}]``.
    """

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        details: list[dict[str, Any]] | str | None = None,
        message: str = "Invalid query parameters",
    ) -> None:
        if isinstance(details, str):
            self.details: list[dict[str, Any]] = [
                {"field": "__root__", "message": details}
            ]
        else:
            self.details = list(details or [])
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }


class NotFoundError(TabulaError):
    """Base class for missing resources."""

    code = "NOT_FOUND"


class TableNotFoundError(NotFoundError):
    """Raised when a table id does not resolve in the schema store."""

    def __init__(self, table_id: object) -> None:
        self.table_id = table_id
        super().__init__(f"Table with id={table_id!r} not found")


class StoreError(TabulaError):
    """Base class for failures of the row store collaborator.

    The message is kept for logs; ``to_dict`` never leaks it.
    """

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "Failed to fetch filtered rows",
            "code": self.code,
        }
