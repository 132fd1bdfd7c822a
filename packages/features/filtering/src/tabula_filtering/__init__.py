"""Filtered, paginated row retrieval: request parsing, pagination, envelope."""

from __future__ import annotations

from .config import PaginationConfig
from .envelope import build_envelope
from .pagination import Page, ResultAssembler
from .ports import IPredicateBuilder, IRowStore, ISchemaLookup
from .request import (
    FilterCriterionPayload,
    RowQueryParams,
    parse_filters,
    parse_leading_int,
)
from .service import FilteredRowsService

__all__ = [
    "FilterCriterionPayload",
    "FilteredRowsService",
    "IPredicateBuilder",
    "IRowStore",
    "ISchemaLookup",
    "Page",
    "PaginationConfig",
    "ResultAssembler",
    "RowQueryParams",
    "build_envelope",
    "parse_filters",
    "parse_leading_int",
]
