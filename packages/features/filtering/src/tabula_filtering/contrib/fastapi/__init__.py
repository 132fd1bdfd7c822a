"""FastAPI integration for tabula-filtering."""

from .router import create_filtered_rows_router

__all__: list[str] = [
    "create_filtered_rows_router",
]
