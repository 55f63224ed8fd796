# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Validation rule tokens and ordered rule sets.

A rule is a single go-playground ``validate`` tag token, either bare
(``unique``) or ``key=value`` (``min=5``). A rule set is an ordered list of
tokens whose keys are unique.
"""

from typing import Iterable, List

RULE_SEPARATOR = ","

REQUIRED = "required"
OMITEMPTY = "omitempty"
PRESENCE_MODIFIERS = (REQUIRED, OMITEMPTY)

RuleSet = List[str]


def rule_key(rule: str) -> str:
    """Key of a rule: the text before the first ``=``, or the whole token."""
    key, _, _ = rule.partition("=")
    return key


def parse_rules(value: str) -> RuleSet:
    """Split a stored rule string into trimmed, non-empty tokens."""
    if not value:
        return []
    return [part.strip() for part in value.split(RULE_SEPARATOR) if part.strip()]


def strip_presence_modifiers(rules: Iterable[str]) -> RuleSet:
    return [rule for rule in rules if rule not in PRESENCE_MODIFIERS]


def join_rules(rules: Iterable[str]) -> str:
    return RULE_SEPARATOR.join(rules)
