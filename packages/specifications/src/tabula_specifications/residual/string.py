"""Case-insensitive lexical operators evaluated after fetch."""

from __future__ import annotations

import re
from typing import Any

from ..coercion import to_text
from ..operators import FilterOperator
from .evaluator import ResidualOperator


def _fold(value: Any) -> str:
    return str(to_text(value)).lower()


class IContainsOperator(ResidualOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.CONTAINS

    def evaluate(self, cell_value: Any, filter_value: Any) -> bool:
        return _fold(filter_value) in _fold(cell_value)


class INotContainsOperator(ResidualOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_CONTAINS

    def evaluate(self, cell_value: Any, filter_value: Any) -> bool:
        return _fold(filter_value) not in _fold(cell_value)


class IStartsWithOperator(ResidualOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.STARTS_WITH

    def evaluate(self, cell_value: Any, filter_value: Any) -> bool:
        return _fold(cell_value).startswith(_fold(filter_value))


class IEndsWithOperator(ResidualOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.ENDS_WITH

    def evaluate(self, cell_value: Any, filter_value: Any) -> bool:
        return _fold(cell_value).endswith(_fold(filter_value))


class RegexOperator(ResidualOperator):
    """Only used when the store has no native pattern match."""

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.REGEX

    def evaluate(self, cell_value: Any, filter_value: Any) -> bool:
        try:
            return bool(re.search(str(filter_value), str(to_text(cell_value))))
        except re.error:
            return False
