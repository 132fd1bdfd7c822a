"""
Fragment builders and default registry.

Usage::

    from tabula_persistence_sqlalchemy.predicates.fragments import (
        DEFAULT_FRAGMENT_REGISTRY,
    )

    clause = DEFAULT_FRAGMENT_REGISTRY.apply(resolved, context)
"""

from __future__ import annotations

from tabula_specifications.operators import FilterOperator

from ..strategy import FragmentRegistry
from .comparison import (
    AfterFragment,
    BeforeFragment,
    GreaterThanFragment,
    GreaterThanOrEqualFragment,
    LessThanFragment,
    LessThanOrEqualFragment,
)
from .equality import EqualsFragment, NotEqualsFragment
from .lexical import ExistenceFragment, RegexFragment
from .presence import IsEmptyFragment, IsNotEmptyFragment
from .range import BetweenFragment, NotBetweenFragment, PeriodFragment


def build_default_fragment_registry() -> FragmentRegistry:
    """Create a registry with all built-in fragment builders."""
    registry = FragmentRegistry()
    registry.register_all(
        # Equality
        EqualsFragment(),
        NotEqualsFragment(),
        # Ordered comparison
        GreaterThanFragment(),
        GreaterThanOrEqualFragment(),
        LessThanFragment(),
        LessThanOrEqualFragment(),
        BeforeFragment(),
        AfterFragment(),
        # Ranges
        BetweenFragment(),
        NotBetweenFragment(),
        PeriodFragment(FilterOperator.TODAY),
        PeriodFragment(FilterOperator.YESTERDAY),
        PeriodFragment(FilterOperator.THIS_WEEK),
        PeriodFragment(FilterOperator.THIS_MONTH),
        PeriodFragment(FilterOperator.THIS_YEAR),
        # Presence
        IsEmptyFragment(),
        IsNotEmptyFragment(),
        # Lexical
        ExistenceFragment(FilterOperator.CONTAINS),
        ExistenceFragment(FilterOperator.NOT_CONTAINS),
        ExistenceFragment(FilterOperator.STARTS_WITH),
        ExistenceFragment(FilterOperator.ENDS_WITH),
        RegexFragment(),
    )
    return registry


DEFAULT_FRAGMENT_REGISTRY: FragmentRegistry = build_default_fragment_registry()

__all__ = [
    "DEFAULT_FRAGMENT_REGISTRY",
    "FragmentRegistry",
    "build_default_fragment_registry",
]
