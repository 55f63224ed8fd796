"""Tests for merging stored rules with generated rules."""

import pytest

from oapi_codegen_validator.exceptions import RuleConflictError
from oapi_codegen_validator.rules.merger import merge_rules
from oapi_codegen_validator.rules.rule_set import parse_rules, rule_key, strip_presence_modifiers


@pytest.mark.parametrize(
    "rule, key",
    [("min=5", "min"), ("unique", "unique"), ("regex=a=b", "regex"), ("=x", "")],
)
def test_rule_key(rule, key):
    assert rule_key(rule) == key


def test_parse_rules_trims_and_drops_blanks():
    assert parse_rules(" required, min=1 ,,max=3, ") == ["required", "min=1", "max=3"]
    assert parse_rules("") == []


def test_strip_presence_modifiers():
    assert strip_presence_modifiers(["omitempty", "manual_tag", "required"]) == ["manual_tag"]


def test_different_keys_keep_both_manual_first():
    assert merge_rules(["manual_tag"], ["min=5"]) == ["manual_tag", "min=5"]


def test_identical_rule_is_not_duplicated():
    assert merge_rules(["min=5", "email"], ["min=5", "max=10", "email"]) == ["min=5", "email", "max=10"]


def test_existing_order_is_preserved_verbatim():
    existing = ["oneof=a b", "max=10", "dive"]
    assert merge_rules(existing, []) == existing


def test_generated_order_is_preserved_when_appending():
    assert merge_rules([], ["min=2", "max=5", "unique"]) == ["min=2", "max=5", "unique"]


def test_blank_existing_tokens_are_ignored():
    assert merge_rules(["", "  min=5 "], ["min=5"]) == ["min=5"]


def test_same_key_different_value_conflicts():
    with pytest.raises(RuleConflictError) as excinfo:
        merge_rules(["min=3"], ["min=5"])
    assert excinfo.value.key == "min"
    assert excinfo.value.existing == "min=3"
    assert excinfo.value.generated == "min=5"


def test_generated_rules_sharing_a_key_conflict():
    with pytest.raises(RuleConflictError):
        merge_rules([], ["min=5", "min=1"])
