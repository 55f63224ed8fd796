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

"""Derivation of validation rules from schema constraints.

Checks run in a fixed order and the emitted rules keep that order:

1. ``multipleOf``  -> always unsupported
2. ``pattern``     -> ``regex=...`` (or unsupported under the ``reject`` policy)
3. string length   -> ``min`` / ``max``
4. numeric bounds  -> ``min`` / ``gt`` / ``max`` / ``lt``
5. array items     -> ``min`` / ``max`` / ``unique``
6. ``format``      -> ``email`` / ``uuid`` / ``ipv4`` / ``ipv6`` / ``url``
"""

from typing import Dict

import re2

from ..config import PATTERN_POLICY_REGEX, PATTERN_POLICY_REJECT
from ..exceptions import ConfigurationError, InvalidPatternError, UnsupportedConstraintError
from ..models.constraints import ConstraintSet
from .rule_set import RuleSet

FORMAT_RULES: Dict[str, str] = {
    "email": "email",
    "uuid": "uuid",
    "ipv4": "ipv4",
    "ipv6": "ipv6",
    "uri": "url",
    "url": "url",
}

# go-playground/validator splits tags on these; they must be escaped in params.
_TAG_ESCAPES = (("|", "0x7C"), (",", "0x2C"))


def _format_bound(value: float) -> str:
    # Fractional bounds are truncated to whole-number display.
    return format(value, ".0f")


def check_pattern(pattern: str) -> None:
    """Raise InvalidPatternError unless ``pattern`` compiles with RE2, the validator's engine."""
    try:
        re2.compile(pattern)
    except re2.error as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc


def escape_tag_param(value: str) -> str:
    for char, escaped in _TAG_ESCAPES:
        value = value.replace(char, escaped)
    return value


def generate_rules(constraints: ConstraintSet, pattern_policy: str = PATTERN_POLICY_REGEX) -> RuleSet:
    """Translate a constraint set into ordered validation rules.

    Raises:
        UnsupportedConstraintError: ``multipleOf`` is set, or ``pattern`` under the reject policy.
        InvalidPatternError: ``pattern`` is not a valid RE2 expression.
    """
    rules: RuleSet = []

    if constraints.multiple_of is not None:
        raise UnsupportedConstraintError("multipleOf")

    if constraints.pattern:
        if pattern_policy == PATTERN_POLICY_REJECT:
            raise UnsupportedConstraintError("pattern")
        if pattern_policy != PATTERN_POLICY_REGEX:
            raise ConfigurationError(f"Unknown pattern policy '{pattern_policy}'")
        check_pattern(constraints.pattern)
        rules.append(f"regex={escape_tag_param(constraints.pattern)}")

    # String
    if constraints.min_length > 0:
        rules.append(f"min={constraints.min_length}")
    if constraints.max_length is not None:
        rules.append(f"max={constraints.max_length}")

    # Number
    if constraints.minimum is not None:
        op = "gt" if constraints.exclusive_minimum else "min"
        rules.append(f"{op}={_format_bound(constraints.minimum)}")
    if constraints.maximum is not None:
        op = "lt" if constraints.exclusive_maximum else "max"
        rules.append(f"{op}={_format_bound(constraints.maximum)}")

    # Array
    if constraints.min_items > 0:
        rules.append(f"min={constraints.min_items}")
    if constraints.max_items is not None:
        rules.append(f"max={constraints.max_items}")
    if constraints.unique_items:
        rules.append("unique")

    format_rule = FORMAT_RULES.get(constraints.format)
    if format_rule:
        rules.append(format_rule)

    return rules
