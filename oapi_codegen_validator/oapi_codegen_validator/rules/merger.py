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

"""Merging of stored (manual) rules with generated rules."""

from typing import Dict, Iterable

from ..exceptions import RuleConflictError
from .rule_set import RuleSet, rule_key


def merge_rules(existing: Iterable[str], generated: Iterable[str]) -> RuleSet:
    """Combine stored rules with freshly generated ones.

    Stored rules are kept verbatim and in order as the prefix of the result.
    A generated rule whose key is already present is skipped when the tokens
    are identical; otherwise the stored rule wins and the disagreement is
    raised as a conflict. Remaining generated rules are appended in order.

    Raises:
        RuleConflictError: a stored and a generated rule share a key but differ.
    """
    merged: RuleSet = []
    by_key: Dict[str, str] = {}

    for rule in existing:
        rule = rule.strip()
        if not rule:
            continue
        merged.append(rule)
        by_key.setdefault(rule_key(rule), rule)

    for rule in generated:
        key = rule_key(rule)
        current = by_key.get(key)
        if current is None:
            merged.append(rule)
            by_key[key] = rule
        elif current != rule:
            raise RuleConflictError(key, current, rule)

    return merged
