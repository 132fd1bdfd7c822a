"""
Lexical fragments for text columns.

``contains`` / ``not_contains`` / ``starts_with`` / ``ends_with`` only
narrow to rows holding a value; the exact, case-insensitive match runs
in the residual pass after fetch.  ``regex`` matches natively when the
store supports it and otherwise degrades the same way.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sqlalchemy import false

from tabula_specifications.columns import TypeFamily
from tabula_specifications.operators import FilterOperator

from ...models import CellModel
from ..strategy import FragmentBuilder
from ..utils import has_cell, has_value

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

    from tabula_specifications.resolution import ResolvedCriterion

    from ..strategy import FragmentContext

_TEXT = frozenset({TypeFamily.TEXT})


class ExistenceFragment(FragmentBuilder):
    """Existence-only fragment for a lexical operator; empty needles are no-ops."""

    def __init__(self, operator: FilterOperator) -> None:
        self._operator = operator

    @property
    def name(self) -> FilterOperator:
        return self._operator

    @property
    def families(self) -> frozenset[TypeFamily]:
        return _TEXT

    def apply(
        self, criterion: ResolvedCriterion, _context: FragmentContext
    ) -> ColumnElement[bool] | None:
        if not criterion.value:
            return None
        return has_value(criterion.column.id)


class RegexFragment(FragmentBuilder):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.REGEX

    @property
    def families(self) -> frozenset[TypeFamily]:
        return _TEXT

    def apply(
        self, criterion: ResolvedCriterion, context: FragmentContext
    ) -> ColumnElement[bool] | None:
        pattern = criterion.value
        if not pattern:
            return None
        if not context.capabilities.regex:
            return has_value(criterion.column.id)
        try:
            re.compile(pattern)
        except re.error:
            # an invalid pattern matches nothing, as in the residual pass
            return has_cell(criterion.column.id, false())
        return has_cell(criterion.column.id, CellModel.text_value.regexp_match(pattern))
