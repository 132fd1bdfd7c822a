from __future__ import annotations

import pytest

from tabula_specifications import (
    OPERATOR_TABLE,
    FilterCriterion,
    OperatorCatalog,
    TypeFamily,
)
from tabula_specifications.operators import FilterOperator as Op


def criterion(column_id, operator, value=None, second_value=None):
    return FilterCriterion(
        columnId=column_id, operator=operator, value=value, secondValue=second_value
    )


@pytest.fixture
def catalog() -> OperatorCatalog:
    return OperatorCatalog()


@pytest.mark.parametrize(
    ("column_type", "expected"),
    [
        (
            "text",
            {
                "contains",
                "not_contains",
                "equals",
                "not_equals",
                "starts_with",
                "ends_with",
                "regex",
                "is_empty",
                "is_not_empty",
            },
        ),
        (
            "decimal",
            {
                "equals",
                "not_equals",
                "greater_than",
                "greater_than_or_equal",
                "less_than",
                "less_than_or_equal",
                "between",
                "not_between",
                "is_empty",
                "is_not_empty",
            },
        ),
        ("boolean", {"equals", "not_equals", "is_empty", "is_not_empty"}),
        (
            "datetime",
            {
                "equals",
                "not_equals",
                "before",
                "after",
                "between",
                "not_between",
                "today",
                "yesterday",
                "this_week",
                "this_month",
                "this_year",
                "is_empty",
                "is_not_empty",
            },
        ),
        ("reference", {"equals", "not_equals", "is_empty", "is_not_empty"}),
        ("customArray", {"equals", "not_equals", "is_empty", "is_not_empty"}),
        ("geometry", {"equals", "not_equals", "is_empty", "is_not_empty"}),
        (None, {"equals", "not_equals", "is_empty", "is_not_empty"}),
    ],
)
def test_valid_operators_table(catalog, column_type, expected):
    assert {op.value for op in catalog.valid_operators(column_type)} == expected


def test_every_family_has_an_entry():
    assert set(OPERATOR_TABLE) == set(TypeFamily)


def test_unknown_column_is_invalid(catalog, schema):
    errors = catalog.validate(criterion(99, "equals", "x"), schema)
    assert errors == ["Column with ID 99 not found"]
    assert not catalog.is_valid(criterion(99, "equals", "x"), schema)


def test_operator_outside_type_is_invalid(catalog, schema):
    errors = catalog.validate(criterion(3, "greater_than", 1), schema)
    assert errors == [
        "Operator 'greater_than' is not compatible with column type 'boolean'"
    ]


def test_unknown_operator_is_invalid(catalog, schema):
    assert not catalog.is_valid(criterion(1, "sounds_like", "x"), schema)


@pytest.mark.parametrize("op", ["today", "yesterday", "this_week", "this_month", "this_year"])
def test_period_operators_ignore_value(catalog, schema, op):
    assert catalog.is_valid(criterion(4, op), schema)
    assert catalog.is_valid(criterion(4, op, "not a date"), schema)


@pytest.mark.parametrize("op", ["is_empty", "is_not_empty"])
def test_presence_operators_need_no_value(catalog, schema, op):
    assert catalog.is_valid(criterion(1, op), schema)


def test_value_bearing_operator_requires_value(catalog, schema):
    assert catalog.validate(criterion(1, "contains", None), schema) == [
        "'value' is required for column 'name'"
    ]


def test_empty_string_is_permitted_for_text(catalog, schema):
    assert catalog.is_valid(criterion(1, "equals", ""), schema)


def test_numeric_value_must_parse(catalog, schema):
    assert catalog.is_valid(criterion(2, "greater_than", "25"), schema)
    assert catalog.validate(criterion(2, "greater_than", "abc"), schema) == [
        "'value' must be numeric for column 'age'"
    ]


def test_date_value_must_parse(catalog, schema):
    assert catalog.is_valid(criterion(4, "before", "2024-01-15"), schema)
    assert not catalog.is_valid(criterion(4, "before", "yesterday-ish"), schema)


def test_range_requires_both_bounds(catalog, schema):
    assert catalog.is_valid(criterion(2, "between", 1, 5), schema)
    errors = catalog.validate(criterion(2, "between", 1, None), schema)
    assert errors == ["'secondValue' is required for column 'age'"]
    errors = catalog.validate(criterion(4, "not_between", "x", "y"), schema)
    assert len(errors) == 2


def test_boolean_column_does_not_check_parseability(catalog, schema):
    # coercion rejects it later; the catalog only requires presence
    assert catalog.is_valid(criterion(3, "equals", "maybe"), schema)


def test_lexical_operators_are_text_only():
    for family, operators in OPERATOR_TABLE.items():
        if family is not TypeFamily.TEXT:
            assert Op.CONTAINS not in operators
            assert Op.REGEX not in operators
