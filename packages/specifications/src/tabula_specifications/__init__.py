"""
tabula-specifications: store-agnostic filter compilation core.

Column schema, operator catalog, value coercion, criterion resolution,
calendar periods, row views, and the residual (in-process) filter pass.
"""

from .catalog import OPERATOR_TABLE, OperatorCatalog
from .coercion import CoercionResult, coerce, format_value, to_text
from .columns import ColumnDescriptor, ColumnSchema, ColumnType, TypeFamily
from .criteria import FilterCriterion
from .exceptions import (
    NotFoundError,
    RequestValidationError,
    StoreError,
    TableNotFoundError,
    TabulaError,
)
from .operators import (
    LEXICAL_OPERATORS,
    PERIOD_OPERATORS,
    PRESENCE_OPERATORS,
    RANGE_OPERATORS,
    FilterOperator,
)
from .ordering import RowOrder, SortField
from .periods import period_range
from .residual import ResidualFilterEngine, build_default_residual_registry
from .resolution import DroppedCriterion, ResolvedCriterion, resolve, resolve_all
from .rows import Cell, Row

__all__ = [
    "Cell",
    "CoercionResult",
    "ColumnDescriptor",
    "ColumnSchema",
    "ColumnType",
    "DroppedCriterion",
    "FilterCriterion",
    "FilterOperator",
    "LEXICAL_OPERATORS",
    "NotFoundError",
    "OPERATOR_TABLE",
    "OperatorCatalog",
    "PERIOD_OPERATORS",
    "PRESENCE_OPERATORS",
    "RANGE_OPERATORS",
    "RequestValidationError",
    "ResidualFilterEngine",
    "ResolvedCriterion",
    "Row",
    "RowOrder",
    "SortField",
    "StoreError",
    "TableNotFoundError",
    "TabulaError",
    "TypeFamily",
    "build_default_residual_registry",
    "coerce",
    "format_value",
    "period_range",
    "resolve",
    "resolve_all",
    "to_text",
]
