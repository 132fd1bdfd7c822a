"""FastAPI router for the filtered-rows endpoint.

Wires the SQLAlchemy store collaborators into :class:`FilteredRowsService`
and maps the error taxonomy onto HTTP statuses.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from tabula_persistence_sqlalchemy.predicates import (
    PredicateBuilder,
    StoreCapabilities,
    local_now,
)
from tabula_persistence_sqlalchemy.schema import SQLAlchemySchemaLookup
from tabula_persistence_sqlalchemy.store import SQLAlchemyRowStore
from tabula_specifications.exceptions import (
    NotFoundError,
    RequestValidationError,
    StoreError,
)

from ...request import RowQueryParams
from ...service import FilteredRowsService

if TYPE_CHECKING:
    import datetime
    from collections.abc import Callable

    from sqlalchemy.ext.asyncio import AsyncSession

    from ...config import PaginationConfig

logger = logging.getLogger(__name__)


def create_filtered_rows_router(
    session_factory: Callable[[], AsyncSession],
    *,
    prefix: str = "",
    pagination: PaginationConfig | None = None,
    capabilities: StoreCapabilities | None = None,
    clock: Callable[[], datetime.datetime] = local_now,
) -> APIRouter:
    """Create a router serving ``GET {prefix}/tables/{table_id}/rows/filtered``.

    Args:
        session_factory: Returns a new ``AsyncSession`` per request, e.g. an
            ``async_sessionmaker``.
        prefix: Router prefix.
        pagination: Page-size limits.
        capabilities: Store capabilities; derived from the session's dialect
            when omitted.
        clock: "Now" for the period operators.

    Returns:
        An ``APIRouter`` to include in the application.

    Example:
        ```python
        app = FastAPI()
        app.include_router(
            create_filtered_rows_router(async_sessionmaker(engine), prefix="/api")
        )
        ```
    """
    router = APIRouter(prefix=prefix)

    @router.get("/tables/{table_id}/rows/filtered")
    async def get_filtered_rows(table_id: str, request: Request) -> JSONResponse:
        try:
            params = RowQueryParams.from_query(
                table_id, request.query_params, pagination
            )
        except RequestValidationError as e:
            return JSONResponse(e.to_dict(), status_code=400)

        try:
            async with session_factory() as session:
                caps = capabilities or StoreCapabilities.for_dialect(
                    session.get_bind().dialect.name
                )
                service = FilteredRowsService(
                    SQLAlchemySchemaLookup(session),
                    SQLAlchemyRowStore(session),
                    PredicateBuilder(caps, clock=clock),
                )
                body = await service.get_page(params)
        except NotFoundError as e:
            return JSONResponse(e.to_dict(), status_code=404)
        except StoreError as e:
            logger.error("Error fetching filtered rows for table %s", table_id)
            return JSONResponse(e.to_dict(), status_code=500)

        return JSONResponse(body)

    return router
