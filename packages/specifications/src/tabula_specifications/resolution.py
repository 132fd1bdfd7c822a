"""
Criterion resolution: validate and coerce, or drop.

Each criterion resolves to exactly one of :class:`ResolvedCriterion` or
:class:`DroppedCriterion`.  Callers aggregate only the resolved ones, so
one bad filter never fails the whole request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, cast

from .catalog import OperatorCatalog
from .coercion import coerce
from .operators import PERIOD_OPERATORS, PRESENCE_OPERATORS, RANGE_OPERATORS
from .operators import FilterOperator as Op

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .columns import ColumnDescriptor, ColumnSchema, TypeFamily
    from .criteria import FilterCriterion

logger = logging.getLogger(__name__)

_DEFAULT_CATALOG = OperatorCatalog()


@dataclass(frozen=True)
class ResolvedCriterion:
    """A criterion whose column, operator, and values are all usable."""

    criterion: FilterCriterion
    column: ColumnDescriptor
    operator: Op
    value: Any = None
    second_value: Any = None

    @property
    def family(self) -> TypeFamily:
        return self.column.family


@dataclass(frozen=True)
class DroppedCriterion:
    criterion: FilterCriterion
    reasons: tuple[str, ...]


def resolve(
    criterion: FilterCriterion,
    schema: ColumnSchema,
    catalog: OperatorCatalog | None = None,
) -> ResolvedCriterion | DroppedCriterion:
    catalog = catalog or _DEFAULT_CATALOG
    errors = catalog.validate(criterion, schema)
    if errors:
        return DroppedCriterion(criterion, tuple(errors))

    column = cast("ColumnDescriptor", schema.get(criterion.column_id))
    op = cast("Op", Op.parse(criterion.operator))

    if op in PERIOD_OPERATORS or op in PRESENCE_OPERATORS:
        return ResolvedCriterion(criterion, column, op)

    first = coerce(criterion.value, column.type)
    if not first.success:
        return DroppedCriterion(criterion, (f"value: {first.error}",))

    second_value = None
    if op in RANGE_OPERATORS:
        second = coerce(criterion.second_value, column.type)
        if not second.success:
            return DroppedCriterion(criterion, (f"secondValue: {second.error}",))
        second_value = second.value

    return ResolvedCriterion(criterion, column, op, first.value, second_value)


def resolve_all(
    criteria: Iterable[FilterCriterion],
    schema: ColumnSchema,
    catalog: OperatorCatalog | None = None,
) -> tuple[list[ResolvedCriterion], list[DroppedCriterion]]:
    """Partition *criteria* into resolved and dropped, preserving order."""
    resolved: list[ResolvedCriterion] = []
    dropped: list[DroppedCriterion] = []
    for criterion in criteria:
        outcome = resolve(criterion, schema, catalog)
        if isinstance(outcome, ResolvedCriterion):
            resolved.append(outcome)
        else:
            logger.debug(
                "Dropping filter on column %s (%s): %s",
                criterion.column_id,
                criterion.operator,
                "; ".join(outcome.reasons),
            )
            dropped.append(outcome)
    return resolved, dropped
