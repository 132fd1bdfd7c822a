"""
PredicateBuilder: resolved criteria to a store-native predicate.

Criteria are resolved first (unknown columns, incompatible operators,
and uncoercible values are dropped).  Each survivor compiles to one
fragment through the registry; fragments that impose no constraint are
skipped.  The predicate is folded immutably: every step returns a new
:class:`Predicate`.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, replace
from functools import reduce
from typing import TYPE_CHECKING

from sqlalchemy import and_

from tabula_specifications.operators import LEXICAL_OPERATORS, FilterOperator
from tabula_specifications.resolution import resolve_all

from ..models import CellModel, RowModel
from .fragments import DEFAULT_FRAGMENT_REGISTRY
from .strategy import FragmentContext, StoreCapabilities

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from sqlalchemy import ColumnElement

    from tabula_specifications.catalog import OperatorCatalog
    from tabula_specifications.columns import ColumnSchema
    from tabula_specifications.criteria import FilterCriterion
    from tabula_specifications.resolution import DroppedCriterion, ResolvedCriterion

    from .strategy import FragmentRegistry


def local_now() -> datetime.datetime:
    """The server's wall clock, as an aware local datetime."""
    return datetime.datetime.now().astimezone()


@dataclass(frozen=True)
class Predicate:
    """
    Which rows of one table qualify.

    ``criteria`` keeps the resolved criteria the predicate was built from
    so callers can run the residual pass against the same set.
    """

    table_id: int
    conditions: tuple[ColumnElement[bool], ...] = ()
    criteria: tuple[ResolvedCriterion, ...] = ()
    dropped: tuple[DroppedCriterion, ...] = ()

    @property
    def where(self) -> ColumnElement[bool]:
        return and_(RowModel.table_id == self.table_id, *self.conditions)

    def with_condition(self, condition: ColumnElement[bool] | None) -> Predicate:
        if condition is None:
            return self
        return replace(self, conditions=(*self.conditions, condition))


def global_search_fragment(term: str) -> ColumnElement[bool] | None:
    """Some cell of the row contains *term*, case-insensitively."""
    term = term.strip()
    if not term:
        return None
    return RowModel.cells.any(CellModel.text_value.icontains(term, autoescape=True))


class PredicateBuilder:
    """
    Compile filter criteria for one table into a :class:`Predicate`.

    Args:
        capabilities: What the store evaluates natively.
        clock: Returns "now" for the period operators; read once per build.
        registry: Fragment builders.  Falls back to
            ``DEFAULT_FRAGMENT_REGISTRY``.
        catalog: Operator catalog used for resolution.
    """

    def __init__(
        self,
        capabilities: StoreCapabilities | None = None,
        *,
        clock: Callable[[], datetime.datetime] = local_now,
        registry: FragmentRegistry | None = None,
        catalog: OperatorCatalog | None = None,
    ) -> None:
        self._capabilities = capabilities or StoreCapabilities()
        self._clock = clock
        self._registry = registry or DEFAULT_FRAGMENT_REGISTRY
        self._catalog = catalog

    @property
    def capabilities(self) -> StoreCapabilities:
        return self._capabilities

    @property
    def residual_operators(self) -> frozenset[FilterOperator]:
        """Operators whose fragments only check existence in this store."""
        if self._capabilities.regex:
            return LEXICAL_OPERATORS
        return LEXICAL_OPERATORS | {FilterOperator.REGEX}

    def build(
        self,
        table_id: int,
        criteria: Iterable[FilterCriterion],
        schema: ColumnSchema,
        global_search: str = "",
    ) -> Predicate:
        resolved, dropped = resolve_all(criteria, schema, self._catalog)
        predicate = self.build_resolved(table_id, resolved, global_search)
        return replace(predicate, dropped=tuple(dropped))

    def build_resolved(
        self,
        table_id: int,
        criteria: Sequence[ResolvedCriterion],
        global_search: str = "",
    ) -> Predicate:
        context = FragmentContext(now=self._clock(), capabilities=self._capabilities)

        def add_fragment(predicate: Predicate, criterion: ResolvedCriterion) -> Predicate:
            return predicate.with_condition(self._registry.apply(criterion, context))

        initial = Predicate(table_id=table_id, criteria=tuple(criteria))
        predicate = reduce(add_fragment, criteria, initial)
        return predicate.with_condition(global_search_fragment(global_search or ""))

    def __repr__(self) -> str:
        return f"<PredicateBuilder capabilities={self._capabilities!r}>"


__all__: list[str] = [
    "Predicate",
    "PredicateBuilder",
    "global_search_fragment",
    "local_now",
]
