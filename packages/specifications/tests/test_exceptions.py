from __future__ import annotations

from tabula_specifications import (
    NotFoundError,
    RequestValidationError,
    StoreError,
    TableNotFoundError,
    TabulaError,
)


def test_hierarchy():
    assert issubclass(RequestValidationError, TabulaError)
    assert issubclass(TableNotFoundError, NotFoundError)
    assert issubclass(StoreError, TabulaError)


def test_validation_error_to_dict():
    err = RequestValidationError([{"field": "table_id", "message": "bad"}])
    assert err.to_dict() == {
        "error": "Invalid query parameters",
        "code": "VALIDATION_ERROR",
        "details": [{"field": "table_id", "message": "bad"}],
    }


def test_validation_error_from_string():
    err = RequestValidationError("broken")
    assert err.details == [{"field": "__root__", "message": "broken"}]


def test_not_found_to_dict():
    assert TableNotFoundError(5).to_dict() == {
        "error": "Table with id=5 not found",
        "code": "NOT_FOUND",
    }


def test_store_error_does_not_leak_details():
    err = StoreError("connection refused at 10.0.0.3:5432")
    assert err.to_dict() == {
        "error": "Failed to fetch filtered rows",
        "code": "INTERNAL_ERROR",
    }
