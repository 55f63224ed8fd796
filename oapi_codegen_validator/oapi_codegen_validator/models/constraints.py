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

"""Constraint keywords of a single schema, as read by the rule generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


def _is_number(value: Any) -> bool:
    # bool is an int subclass; `exclusiveMinimum: true` must not read as 1
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _bound(
    schema: Dict[str, Any], keyword: str, exclusive_keyword: str, lower: bool
) -> Tuple[Optional[float], bool]:
    """Read an OpenAPI 3.0 (boolean flag) or 3.1 (numeric) bound.

    In the 3.1 form both keywords apply together, so the stricter one is kept;
    on a tie the exclusive bound is stricter.
    """
    value = schema.get(keyword)
    exclusive = schema.get(exclusive_keyword)

    if _is_number(exclusive):
        if not _is_number(value):
            return exclusive, True
        if (exclusive >= value) if lower else (exclusive <= value):
            return exclusive, True
        return value, False

    return (value if _is_number(value) else None), exclusive is True


def _count(schema: Dict[str, Any], keyword: str) -> Optional[int]:
    value = schema.get(keyword)
    return int(value) if _is_number(value) else None


@dataclass(frozen=True)
class ConstraintSet:
    """Immutable view of the constraint keywords declared on one schema."""

    min_length: int = 0
    max_length: Optional[int] = None
    minimum: Optional[float] = None
    exclusive_minimum: bool = False
    maximum: Optional[float] = None
    exclusive_maximum: bool = False
    min_items: int = 0
    max_items: Optional[int] = None
    unique_items: bool = False
    format: str = ""
    pattern: str = ""
    multiple_of: Optional[float] = None

    @classmethod
    def from_schema(cls, schema: Optional[Dict[str, Any]]) -> ConstraintSet:
        if not schema:
            return cls()

        minimum, exclusive_minimum = _bound(schema, "minimum", "exclusiveMinimum", lower=True)
        maximum, exclusive_maximum = _bound(schema, "maximum", "exclusiveMaximum", lower=False)

        return cls(
            min_length=_count(schema, "minLength") or 0,
            max_length=_count(schema, "maxLength"),
            minimum=minimum,
            exclusive_minimum=exclusive_minimum,
            maximum=maximum,
            exclusive_maximum=exclusive_maximum,
            min_items=_count(schema, "minItems") or 0,
            max_items=_count(schema, "maxItems"),
            unique_items=schema.get("uniqueItems") is True,
            format=str(schema.get("format") or ""),
            pattern=str(schema.get("pattern") or ""),
            multiple_of=schema.get("multipleOf"),
        )
