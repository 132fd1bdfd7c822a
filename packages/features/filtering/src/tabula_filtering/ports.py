"""Collaborator protocols consumed by the filtered-rows pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tabula_specifications.columns import ColumnSchema
    from tabula_specifications.operators import FilterOperator
    from tabula_specifications.ordering import RowOrder
    from tabula_specifications.resolution import ResolvedCriterion
    from tabula_specifications.rows import Row


@runtime_checkable
class IRowStore(Protocol):
    """
    Count and fetch rows matching an opaque predicate.

    The predicate is whatever the paired :class:`IPredicateBuilder`
    produced; the pipeline never inspects it.
    """

    async def count(self, predicate: Any) -> int: ...

    async def count_table(self, table_id: int) -> int: ...

    async def fetch(
        self,
        predicate: Any,
        *,
        order: RowOrder | None = None,
        offset: int = 0,
        limit: int | None = None,
        include_cells: bool = True,
    ) -> list[Row]: ...


@runtime_checkable
class ISchemaLookup(Protocol):
    async def get_schema(self, table_id: int) -> ColumnSchema: ...


@runtime_checkable
class IPredicateBuilder(Protocol):
    @property
    def residual_operators(self) -> frozenset[FilterOperator]:
        """Operators the store only narrows and the residual pass must finish."""
        ...

    def build_resolved(
        self,
        table_id: int,
        criteria: Sequence[ResolvedCriterion],
        global_search: str = "",
    ) -> Any: ...
