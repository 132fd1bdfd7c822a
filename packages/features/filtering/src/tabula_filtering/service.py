"""
FilteredRowsService: one filtered, paginated page of a table's rows.

Pipeline: schema lookup, criterion resolution, predicate construction,
count + fetch, residual pass, envelope.  Store calls run one after the
other on the caller's task; cancelling that task abandons the request
without producing a partial page.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from tabula_specifications.residual import ResidualFilterEngine
from tabula_specifications.resolution import resolve_all

from .envelope import build_envelope
from .pagination import ResultAssembler

if TYPE_CHECKING:
    from tabula_specifications.catalog import OperatorCatalog

    from .ports import IPredicateBuilder, IRowStore, ISchemaLookup
    from .request import RowQueryParams

logger = logging.getLogger(__name__)


class FilteredRowsService:
    def __init__(
        self,
        schema_lookup: ISchemaLookup,
        store: IRowStore,
        predicate_builder: IPredicateBuilder,
        *,
        catalog: OperatorCatalog | None = None,
    ) -> None:
        self._schema_lookup = schema_lookup
        self._store = store
        self._builder = predicate_builder
        self._catalog = catalog
        self._assembler = ResultAssembler(
            store,
            ResidualFilterEngine(predicate_builder.residual_operators, catalog=catalog),
        )

    async def get_page(self, params: RowQueryParams) -> dict[str, Any]:
        """
        Run the pipeline for *params* and return the response envelope.

        Raises:
            TableNotFoundError: If the table does not exist.
            StoreError: If a store call fails.
        """
        started = time.perf_counter()

        schema = await self._schema_lookup.get_schema(params.table_id)
        resolved, dropped = resolve_all(params.filters, schema, self._catalog)
        predicate = self._builder.build_resolved(
            params.table_id, resolved, params.global_search
        )

        page = await self._assembler.assemble(
            predicate,
            params.filters,
            schema,
            params.page,
            params.page_size,
            sort_by=params.sort_by,
            sort_order=params.sort_order,
            include_cells=params.include_cells,
        )
        original_table_size = await self._store.count_table(params.table_id)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            "Filtered rows for table %s: %d/%d matched, %d returned, "
            "%d filter(s) applied, %d dropped in %.1fms",
            params.table_id,
            page.total_count,
            original_table_size,
            len(page.rows),
            len(resolved),
            len(dropped),
            elapsed_ms,
        )
        return build_envelope(
            params,
            page,
            valid_filters_count=len(resolved),
            query_time_ms=elapsed_ms,
            original_table_size=original_table_size,
        )
