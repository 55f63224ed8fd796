"""Validation rule derivation and merging."""

from .rule_set import RuleSet, join_rules, parse_rules, rule_key
from .generator import generate_rules
from .merger import merge_rules

__all__ = ['RuleSet', 'generate_rules', 'join_rules', 'merge_rules', 'parse_rules', 'rule_key']
