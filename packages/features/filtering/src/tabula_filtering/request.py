"""
Query parameters for the filtered-rows request.

Parsing is lenient where clients are known to be sloppy: ``page`` and
``pageSize`` take their leading integer and are clamped, and a
``filters`` value that is not a well-formed JSON array of criteria
counts as "no filters".  Only a bad table id is rejected.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import unquote

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from tabula_specifications.criteria import FilterCriterion
from tabula_specifications.exceptions import RequestValidationError

from .config import PaginationConfig

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class FilterCriterionPayload(FilterCriterion):
    """Wire shape of one criterion: the column echo fields are required."""

    column_name: str = Field(alias="columnName", min_length=1)  # type: ignore[assignment]
    column_type: str = Field(alias="columnType", min_length=1)  # type: ignore[assignment]


_CRITERIA_ADAPTER: TypeAdapter[list[FilterCriterionPayload]] = TypeAdapter(
    list[FilterCriterionPayload]
)


def parse_filters(raw: str | None) -> list[FilterCriterion]:
    """
    Decode the ``filters`` parameter.

    Any failure (bad percent-encoding, bad JSON, wrong shape) yields ``[]``.
    """
    if not raw:
        return []
    try:
        data = json.loads(unquote(raw, errors="strict"))
        return list(_CRITERIA_ADAPTER.validate_python(data))
    except (UnicodeDecodeError, ValueError) as e:
        # json.JSONDecodeError and pydantic.ValidationError are ValueErrors
        logger.debug("Ignoring malformed filters parameter: %s", e)
        return []


def parse_leading_int(raw: Any) -> int | None:
    """``"12abc"`` -> 12; anything without a leading integer -> ``None``."""
    if raw is None:
        return None
    match = _LEADING_INT.match(str(raw))
    return int(match.group(1)) if match else None


class RowQueryParams(BaseModel):
    """Normalised request for one filtered-rows page."""

    model_config = ConfigDict(frozen=True)

    table_id: int = Field(gt=0)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=25, ge=1)
    include_cells: bool = True
    global_search: str = ""
    filters: tuple[FilterCriterion, ...] = ()
    sort_by: str = "id"
    sort_order: str = "asc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @classmethod
    def from_query(
        cls,
        table_id: Any,
        params: Mapping[str, Any],
        config: PaginationConfig | None = None,
    ) -> RowQueryParams:
        """
        Build from raw query-string values.

        Raises:
            RequestValidationError: If the normalised values are still invalid.
        """
        config = config or PaginationConfig()

        page = parse_leading_int(params.get("page")) or 1
        page_size = parse_leading_int(params.get("pageSize")) or config.default_page_size

        try:
            return cls(
                table_id=table_id,
                page=max(1, page),
                page_size=min(max(1, page_size), config.max_page_size),
                include_cells=params.get("includeCells") != "false",
                global_search=(params.get("globalSearch") or "").strip(),
                filters=tuple(parse_filters(params.get("filters"))),
                sort_by=params.get("sortBy") or "id",
                sort_order="desc" if params.get("sortOrder") == "desc" else "asc",
            )
        except ValidationError as e:
            raise RequestValidationError(
                [
                    {
                        "field": ".".join(str(loc) for loc in err["loc"]),
                        "message": err["msg"],
                    }
                    for err in e.errors()
                ]
            ) from e
