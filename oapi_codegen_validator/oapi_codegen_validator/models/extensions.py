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

"""Typed access to the validation slot of a schema's extension metadata.

The slot lives under an outer extension key (``x-oapi-codegen-extra-tags``)
whose value is a mapping; its ``validate`` entry holds one comma-joined rule
string. Other entries of the outer mapping (e.g. ``json`` tags) are left alone.
"""

from typing import Any, Dict, Optional

from ..rules.rule_set import RuleSet, join_rules, parse_rules

DEFAULT_EXTENSION_KEY = "x-oapi-codegen-extra-tags"
DEFAULT_VALIDATE_KEY = "validate"


class ExtensionMetadata:
    """Read, write and clear the stored rule string of one schema mapping."""

    def __init__(
        self,
        schema: Dict[str, Any],
        extension_key: str = DEFAULT_EXTENSION_KEY,
        validate_key: str = DEFAULT_VALIDATE_KEY,
    ):
        self.schema = schema
        self.extension_key = extension_key
        self.validate_key = validate_key

    def _tags(self) -> Optional[Dict[str, Any]]:
        tags = self.schema.get(self.extension_key)
        return tags if isinstance(tags, dict) else None

    def raw_rules(self) -> Optional[str]:
        """The stored rule string, or None when the slot is absent or not a string."""
        tags = self._tags()
        if tags is None:
            return None
        value = tags.get(self.validate_key)
        return value if isinstance(value, str) else None

    def read_rules(self) -> RuleSet:
        return parse_rules(self.raw_rules() or "")

    def write_rules(self, rules: RuleSet) -> None:
        tags = self._tags()
        if tags is None:
            tags = {}
            self.schema[self.extension_key] = tags
        tags[self.validate_key] = join_rules(rules)

    def clear_rules(self) -> None:
        """Remove the slot, and the outer mapping once nothing else is left in it."""
        tags = self._tags()
        if tags is None:
            return
        tags.pop(self.validate_key, None)
        if not tags:
            del self.schema[self.extension_key]
