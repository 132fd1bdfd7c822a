"""
Residual operator evaluation strategy.

Provides the ResidualOperator protocol and a registry that maps
FilterOperator → evaluation function, mirroring the store-side
fragment registry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..operators import FilterOperator


class ResidualOperator(ABC):
    """
    Strategy interface for in-process evaluation of one operator.

    ``cell_value`` is never ``None`` here; rows without a value are
    rejected by the engine before any operator runs.
    """

    @property
    @abstractmethod
    def name(self) -> FilterOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def evaluate(self, cell_value: Any, filter_value: Any) -> bool:
        """Return True if the fetched cell satisfies the criterion."""
        ...


class ResidualOperatorRegistry:
    """Registry of ResidualOperator instances keyed by FilterOperator."""

    def __init__(self) -> None:
        self._operators: dict[FilterOperator, ResidualOperator] = {}

    def register(self, operator: ResidualOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: ResidualOperator) -> None:
        for op in operators:
            self.register(op)

    def get(self, name: FilterOperator) -> ResidualOperator | None:
        return self._operators.get(name)

    def has(self, name: FilterOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[FilterOperator]:
        return set(self._operators.keys())

    def evaluate(self, name: FilterOperator, cell_value: Any, filter_value: Any) -> bool:
        """
        Look up the operator and evaluate.

        Raises:
            ValueError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise ValueError(f"Unsupported operator for residual evaluation: {name}")
        return op.evaluate(cell_value, filter_value)
