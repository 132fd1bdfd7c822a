"""
Paginator / ResultAssembler.

Counts and fetches one page through the row store, runs the residual
pass over that page only, and orders each row's cells by the columns'
declared order.

``total_count`` is the store-side match count taken before the residual
pass.  It is not reduced when the residual pass drops rows from the
page, so ``total_pages`` and ``has_next`` can overstate the filtered set
while lexical filters are active.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from tabula_specifications.ordering import RowOrder
from tabula_specifications.residual import ResidualFilterEngine

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tabula_specifications.columns import ColumnSchema
    from tabula_specifications.criteria import FilterCriterion
    from tabula_specifications.rows import Row

    from .ports import IRowStore


@dataclass(frozen=True)
class Page:
    rows: list[Row]
    total_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "totalRows": self.total_count,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


class ResultAssembler:
    def __init__(
        self,
        store: IRowStore,
        residual: ResidualFilterEngine | None = None,
    ) -> None:
        self._store = store
        self._residual = residual or ResidualFilterEngine()

    async def assemble(
        self,
        predicate: Any,
        criteria: Sequence[FilterCriterion],
        schema: ColumnSchema,
        page: int,
        page_size: int,
        sort_by: str = "id",
        sort_order: str = "asc",
        include_cells: bool = True,
    ) -> Page:
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be positive")

        total_count = await self._store.count(predicate)

        # the residual pass reads cells even when the caller does not want them
        needs_cells = include_cells or bool(
            criteria and self._residual.residual_criteria(criteria, schema)
        )
        rows = await self._store.fetch(
            predicate,
            order=RowOrder.parse(sort_by, sort_order),
            offset=(page - 1) * page_size,
            limit=page_size,
            include_cells=needs_cells,
        )

        if criteria:
            rows = self._residual.apply(rows, criteria, schema)

        if include_cells:
            rows = [row.ordered_by(schema) for row in rows]
        elif needs_cells:
            rows = [row.with_cells(()) for row in rows]

        return Page(
            rows=rows,
            total_count=total_count,
            page=page,
            page_size=page_size,
        )
