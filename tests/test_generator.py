"""Tests for rule generation from schema constraints."""

import pytest

from oapi_codegen_validator.exceptions import InvalidPatternError, UnsupportedConstraintError
from oapi_codegen_validator.models.constraints import ConstraintSet
from oapi_codegen_validator.rules.generator import check_pattern, generate_rules


def rules_for(schema, **kwargs):
    return generate_rules(ConstraintSet.from_schema(schema), **kwargs)


@pytest.mark.parametrize(
    "schema, expected",
    [
        ({"minLength": 5, "maxLength": 10}, ["min=5", "max=10"]),
        ({"minLength": 0, "maxLength": 0}, ["max=0"]),
        ({"minimum": 1}, ["min=1"]),
        ({"minimum": 1, "maximum": 100}, ["min=1", "max=100"]),
        ({"minimum": 1, "exclusiveMinimum": True}, ["gt=1"]),
        ({"maximum": 100, "exclusiveMaximum": True}, ["lt=100"]),
        ({"minimum": 1, "exclusiveMinimum": True, "maximum": 100, "exclusiveMaximum": True}, ["gt=1", "lt=100"]),
        ({"minItems": 2, "maxItems": 5, "uniqueItems": True}, ["min=2", "max=5", "unique"]),
        ({"format": "email"}, ["email"]),
        ({"format": "uuid"}, ["uuid"]),
        ({"format": "ipv4"}, ["ipv4"]),
        ({"format": "ipv6"}, ["ipv6"]),
        ({"format": "uri"}, ["url"]),
        ({"format": "url"}, ["url"]),
        ({"format": "date-time"}, []),
        ({"type": "string"}, []),
        ({}, []),
    ],
)
def test_rules_follow_check_order(schema, expected):
    assert rules_for(schema) == expected


def test_fractional_bounds_are_rendered_without_decimals():
    assert rules_for({"minimum": 0.4, "maximum": 99.6}) == ["min=0", "max=100"]


def test_openapi_31_numeric_exclusive_bounds():
    assert rules_for({"exclusiveMinimum": 3, "exclusiveMaximum": 10}) == ["gt=3", "lt=10"]


def test_exclusive_flag_false_keeps_inclusive_bound():
    assert rules_for({"minimum": 2, "exclusiveMinimum": False}) == ["min=2"]


def test_mixed_constraints_keep_positional_order():
    schema = {"minLength": 3, "format": "email", "maxLength": 64}
    assert rules_for(schema) == ["min=3", "max=64", "email"]


def test_generation_is_deterministic():
    constraints = ConstraintSet.from_schema({"minItems": 1, "maxItems": 3, "uniqueItems": True, "format": "uuid"})
    first = generate_rules(constraints)
    assert generate_rules(constraints) == first
    assert generate_rules(constraints) == first


@pytest.mark.parametrize("multiple_of", [5, 0.5, 0])
def test_multiple_of_is_unsupported(multiple_of):
    with pytest.raises(UnsupportedConstraintError) as excinfo:
        rules_for({"multipleOf": multiple_of, "minimum": 1, "format": "email"})
    assert excinfo.value.keyword == "multipleOf"


def test_multiple_of_wins_over_pattern():
    with pytest.raises(UnsupportedConstraintError) as excinfo:
        rules_for({"multipleOf": 2, "pattern": "(?=bad"})
    assert excinfo.value.keyword == "multipleOf"


class TestPatternPolicy:
    def test_regex_policy_emits_regex_first(self):
        schema = {"pattern": "^[a-z]+$", "minLength": 2}
        assert rules_for(schema) == ["regex=^[a-z]+$", "min=2"]

    def test_reject_policy(self):
        with pytest.raises(UnsupportedConstraintError) as excinfo:
            rules_for({"pattern": "^[a-z]+$"}, pattern_policy="reject")
        assert excinfo.value.keyword == "pattern"

    def test_tag_separators_are_escaped(self):
        assert rules_for({"pattern": "^(a|b){1,3}$"}) == ["regex=^(a0x7Cb){10x2C3}$"]

    def test_uncompilable_pattern(self):
        with pytest.raises(InvalidPatternError):
            rules_for({"pattern": "([a-z"})

    @pytest.mark.parametrize(
        "pattern",
        [
            "^(?=.*[0-9]).+$",
            "^(?!admin).*$",
            "(?<=x)y",
            "(?<!x)y",
            r"(a)\1",
            "(?P<x>a)(?P=x)",
            "a*+b",
            r"^abc\Z",
            "(?#c)abc",
        ],
    )
    def test_constructs_missing_from_re2(self, pattern):
        with pytest.raises(InvalidPatternError):
            check_pattern(pattern)

    @pytest.mark.parametrize(
        "pattern",
        [
            r"^\p{L}+$",
            r"^\pN+$",
            r"^\(?=$",
            r"^[(?=]+$",
            r"^\\1$",
            r"^(?P<word>\w+)\z",
        ],
    )
    def test_patterns_accepted_by_re2(self, pattern):
        check_pattern(pattern)

    def test_unicode_class_pattern_is_emitted(self):
        assert rules_for({"pattern": r"^\p{L}+$"}) == [r"regex=^\p{L}+$"]


@pytest.mark.parametrize(
    "schema, expected",
    [
        ({"minimum": 5, "exclusiveMinimum": 3}, ["min=5"]),
        ({"minimum": 3, "exclusiveMinimum": 5}, ["gt=5"]),
        ({"minimum": 4, "exclusiveMinimum": 4}, ["gt=4"]),
        ({"maximum": 10, "exclusiveMaximum": 20}, ["max=10"]),
        ({"maximum": 20, "exclusiveMaximum": 10}, ["lt=10"]),
        ({"maximum": 7, "exclusiveMaximum": 7}, ["lt=7"]),
    ],
)
def test_openapi_31_bounds_keep_the_stricter_keyword(schema, expected):
    assert rules_for(schema) == expected
