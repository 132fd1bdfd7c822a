"""
Fragment compilation strategy.

Provides the ``FragmentBuilder`` interface and a registry keyed by
``(FilterOperator, TypeFamily)``, structured in the same strategy
pattern as the in-process residual evaluator.  A builder returns a
SQLAlchemy boolean clause, or ``None`` for "no constraint".
"""

from __future__ import annotations

import datetime
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from tabula_specifications.columns import TypeFamily
    from tabula_specifications.operators import FilterOperator
    from tabula_specifications.resolution import ResolvedCriterion

# Dialects with a native pattern match behind ``regexp_match``
REGEX_DIALECTS = frozenset({"postgresql", "sqlite", "mysql", "mariadb", "oracle"})


@dataclass(frozen=True)
class StoreCapabilities:
    """What the store can evaluate natively."""

    regex: bool = False

    @classmethod
    def for_dialect(cls, dialect_name: str) -> StoreCapabilities:
        return cls(regex=dialect_name in REGEX_DIALECTS)


@dataclass(frozen=True)
class FragmentContext:
    """Per-request inputs shared by every fragment of one predicate."""

    now: datetime.datetime
    capabilities: StoreCapabilities = field(default_factory=StoreCapabilities)


class FragmentBuilder(ABC):
    """
    Strategy interface for compiling one resolved criterion into a
    SQLAlchemy ``ColumnElement[bool]`` over ``RowModel``.
    """

    @property
    @abstractmethod
    def name(self) -> FilterOperator:
        """The operator this strategy handles."""
        ...

    @property
    @abstractmethod
    def families(self) -> frozenset[TypeFamily]:
        """Column type families this strategy can compile."""
        ...

    @abstractmethod
    def apply(
        self,
        criterion: ResolvedCriterion,
        context: FragmentContext,
    ) -> ColumnElement[bool] | None:
        """
        Build the fragment.

        Args:
            criterion: A validated and coerced criterion.
            context: Clock reading and store capabilities for the request.

        Returns:
            A SQLAlchemy boolean expression, or ``None`` when the
            criterion imposes no constraint.
        """
        ...


class FragmentRegistry:
    """
    Registry of ``FragmentBuilder`` instances keyed by
    ``(FilterOperator, TypeFamily)``.
    """

    def __init__(self) -> None:
        self._builders: dict[tuple[FilterOperator, TypeFamily], FragmentBuilder] = {}

    def register(self, builder: FragmentBuilder) -> None:
        for family in builder.families:
            self._builders[(builder.name, family)] = builder

    def register_all(self, *builders: FragmentBuilder) -> None:
        for builder in builders:
            self.register(builder)

    def unregister(self, name: FilterOperator, family: TypeFamily) -> None:
        self._builders.pop((name, family), None)

    def get(self, name: FilterOperator, family: TypeFamily) -> FragmentBuilder | None:
        return self._builders.get((name, family))

    def has(self, name: FilterOperator, family: TypeFamily) -> bool:
        return (name, family) in self._builders

    @property
    def supported_pairs(self) -> set[tuple[FilterOperator, TypeFamily]]:
        return set(self._builders.keys())

    def apply(
        self,
        criterion: ResolvedCriterion,
        context: FragmentContext,
    ) -> ColumnElement[bool] | None:
        """
        Look up the builder for the criterion's operator and family and apply.

        Pairs without a builder impose no constraint.
        """
        builder = self.get(criterion.operator, criterion.family)
        if builder is None:
            return None
        return builder.apply(criterion, context)
