"""The JSON response envelope of a filtered-rows request."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .pagination import Page
    from .request import RowQueryParams


def build_envelope(
    params: RowQueryParams,
    page: Page,
    *,
    valid_filters_count: int,
    query_time_ms: float,
    original_table_size: int,
) -> dict[str, Any]:
    """
    Assemble the response body.

    ``columnFilters`` echoes every parsed criterion, while
    ``validFiltersCount`` counts only the criteria that resolved against the
    schema.  Dropped criteria (unknown column, incompatible operator, bad
    value) appear in the former but not in the latter.
    """
    return {
        "data": [row.to_dict(include_cells=params.include_cells) for row in page.rows],
        "pagination": page.to_dict(),
        "filters": {
            "applied": bool(params.filters) or params.global_search != "",
            "globalSearch": params.global_search,
            "columnFilters": [f.to_wire() for f in params.filters],
            "validFiltersCount": valid_filters_count,
        },
        "performance": {
            "queryTime": round(query_time_ms, 3),
            "filteredRows": page.total_count,
            "originalTableSize": original_table_size,
        },
    }
