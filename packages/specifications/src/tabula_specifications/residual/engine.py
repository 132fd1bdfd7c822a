"""ResidualFilterEngine: exact matching for criteria the store only narrows."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..columns import TypeFamily
from ..operators import LEXICAL_OPERATORS
from ..resolution import ResolvedCriterion, resolve

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..catalog import OperatorCatalog
    from ..columns import ColumnSchema
    from ..criteria import FilterCriterion
    from ..operators import FilterOperator
    from ..rows import Row
    from .evaluator import ResidualOperatorRegistry

DEFAULT_RESIDUAL_OPERATORS: frozenset[FilterOperator] = LEXICAL_OPERATORS


def _has_value(value: Any) -> bool:
    return value is not None and value != ""


class ResidualFilterEngine:
    """
    Re-evaluate text-family criteria over a fetched page.

    A row is kept only if it passes every residual criterion.  A row whose
    target cell is missing or holds no value fails every residual operator,
    ``not_contains`` included.

    Criteria that do not resolve (unknown column, incompatible operator,
    bad value) are ignored here exactly as they are by the predicate
    builder.  A criterion with an empty search value is a no-op filter.
    """

    def __init__(
        self,
        operators: Iterable[FilterOperator] = DEFAULT_RESIDUAL_OPERATORS,
        *,
        registry: ResidualOperatorRegistry | None = None,
        catalog: OperatorCatalog | None = None,
    ) -> None:
        if registry is None:
            from . import build_default_residual_registry

            registry = build_default_residual_registry()
        self._operators = frozenset(operators)
        unsupported = self._operators - registry.supported_operators
        if unsupported:
            raise ValueError(
                "No residual evaluator for: "
                + ", ".join(sorted(op.value for op in unsupported))
            )
        self._registry = registry
        self._catalog = catalog

    @property
    def operators(self) -> frozenset[FilterOperator]:
        return self._operators

    def residual_criteria(
        self, criteria: Iterable[FilterCriterion], schema: ColumnSchema
    ) -> list[ResolvedCriterion]:
        """The subset of *criteria* this engine will evaluate."""
        selected: list[ResolvedCriterion] = []
        for criterion in criteria:
            outcome = resolve(criterion, schema, self._catalog)
            if not isinstance(outcome, ResolvedCriterion):
                continue
            if outcome.family is not TypeFamily.TEXT:
                continue
            if outcome.operator not in self._operators:
                continue
            if not _has_value(outcome.value):
                continue
            selected.append(outcome)
        return selected

    def apply(
        self,
        rows: Sequence[Row],
        criteria: Iterable[FilterCriterion],
        schema: ColumnSchema,
    ) -> list[Row]:
        residual = self.residual_criteria(criteria, schema)
        if not residual:
            return list(rows)
        return [row for row in rows if self._matches(row, residual)]

    def _matches(self, row: Row, residual: list[ResolvedCriterion]) -> bool:
        for item in residual:
            cell = row.cell(item.column.id)
            if cell is None or not _has_value(cell.value):
                return False
            if not self._registry.evaluate(item.operator, cell.value, item.value):
                return False
        return True
