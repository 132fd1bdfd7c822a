"""
In-process refinement of an already-fetched page.

The store narrows lexical text filters by existence only; the residual
pass applies the exact case-insensitive match to each fetched row.

Usage::

    from tabula_specifications.residual import ResidualFilterEngine

    engine = ResidualFilterEngine()
    kept = engine.apply(rows, criteria, schema)
"""

from __future__ import annotations

from .engine import DEFAULT_RESIDUAL_OPERATORS, ResidualFilterEngine
from .evaluator import ResidualOperator, ResidualOperatorRegistry
from .string import (
    IContainsOperator,
    IEndsWithOperator,
    INotContainsOperator,
    IStartsWithOperator,
    RegexOperator,
)


def build_default_residual_registry() -> ResidualOperatorRegistry:
    """Create a registry with every built-in residual operator."""
    registry = ResidualOperatorRegistry()
    registry.register_all(
        IContainsOperator(),
        INotContainsOperator(),
        IStartsWithOperator(),
        IEndsWithOperator(),
        RegexOperator(),
    )
    return registry


__all__ = [
    "DEFAULT_RESIDUAL_OPERATORS",
    "IContainsOperator",
    "IEndsWithOperator",
    "INotContainsOperator",
    "IStartsWithOperator",
    "RegexOperator",
    "ResidualFilterEngine",
    "ResidualOperator",
    "ResidualOperatorRegistry",
    "build_default_residual_registry",
]
