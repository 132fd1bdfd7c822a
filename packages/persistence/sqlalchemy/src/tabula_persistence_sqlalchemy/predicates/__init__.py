"""Compile filter criteria into SQLAlchemy predicates over the cell store."""

from .builder import Predicate, PredicateBuilder, global_search_fragment, local_now
from .fragments import DEFAULT_FRAGMENT_REGISTRY, build_default_fragment_registry
from .strategy import (
    REGEX_DIALECTS,
    FragmentBuilder,
    FragmentContext,
    FragmentRegistry,
    StoreCapabilities,
)

__all__ = [
    "DEFAULT_FRAGMENT_REGISTRY",
    "FragmentBuilder",
    "FragmentContext",
    "FragmentRegistry",
    "Predicate",
    "PredicateBuilder",
    "REGEX_DIALECTS",
    "StoreCapabilities",
    "build_default_fragment_registry",
    "global_search_fragment",
    "local_now",
]
