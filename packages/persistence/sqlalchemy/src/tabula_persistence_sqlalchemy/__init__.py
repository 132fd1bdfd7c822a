"""
tabula-persistence-sqlalchemy: the cell store on SQLAlchemy 2.x (async).

EAV models with typed cell projections, the fragment-builder registry,
the PredicateBuilder, and the row store / schema lookup collaborators.
"""

from .exceptions import RowStoreError
from .models import Base, CellModel, ColumnModel, RowModel, TableModel, project
from .predicates import (
    DEFAULT_FRAGMENT_REGISTRY,
    FragmentBuilder,
    FragmentContext,
    FragmentRegistry,
    Predicate,
    PredicateBuilder,
    StoreCapabilities,
    build_default_fragment_registry,
)
from .schema import SQLAlchemySchemaLookup
from .store import SQLAlchemyRowStore, to_row
from .types import JSONType, UTCDateTime

__all__ = [
    "Base",
    "CellModel",
    "ColumnModel",
    "DEFAULT_FRAGMENT_REGISTRY",
    "FragmentBuilder",
    "FragmentContext",
    "FragmentRegistry",
    "JSONType",
    "Predicate",
    "PredicateBuilder",
    "RowModel",
    "RowStoreError",
    "SQLAlchemyRowStore",
    "SQLAlchemySchemaLookup",
    "StoreCapabilities",
    "TableModel",
    "UTCDateTime",
    "build_default_fragment_registry",
    "project",
    "to_row",
]
