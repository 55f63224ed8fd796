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

"""Adapter exposing an OpenAPI document's schemas as traversal nodes.

Schemas reached through ``$ref`` are resolved and a copy of the target is
inlined into the container before a node is produced for it: metadata written
onto that copy is emitted where the reference used to be, and every occurrence
of a shared component carries its own. A reference back to a schema already on
the active path is left in place.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Set, Tuple

logger = logging.getLogger(__name__)

REF_KEY = "$ref"
JsonPointer = str


def json_pointer_escape(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def json_pointer_unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def join_pointer(base: JsonPointer, *tokens: str) -> JsonPointer:
    return base + "".join(f"/{json_pointer_escape(token)}" for token in tokens)


class RefResolver:
    """Resolves local ``#/...`` references against one document."""

    def __init__(self, document: Dict[str, Any]):
        self.document = document

    def _lookup(self, ref: str) -> Optional[Any]:
        if not ref.startswith("#"):
            # External references are left to the document loader.
            return None
        pointer = ref[1:]
        if pointer and not pointer.startswith("/"):
            return None

        node: Any = self.document
        for raw in pointer.split("/")[1:]:
            token = json_pointer_unescape(raw)
            if isinstance(node, dict) and token in node:
                node = node[token]
            elif isinstance(node, list) and token.isdigit() and int(token) < len(node):
                node = node[int(token)]
            else:
                return None
        return node

    def resolve(self, schema: Any, yaml_path: JsonPointer) -> Optional[Tuple[Dict[str, Any], JsonPointer]]:
        """Follow a (possibly chained) reference to its concrete schema.

        Returns the concrete mapping and its location, or None when the
        reference is missing, external or loops.
        """
        seen: Set[str] = set()
        while isinstance(schema, dict) and REF_KEY in schema:
            ref = schema[REF_KEY]
            if not isinstance(ref, str) or ref in seen:
                return None
            seen.add(ref)
            target = self._lookup(ref)
            if target is None:
                return None
            schema, yaml_path = target, ref[1:]
        if not isinstance(schema, dict):
            return None
        return schema, yaml_path

    def inline(
        self,
        container: MutableMapping[str, Any],
        key: str,
        yaml_path: JsonPointer,
        lineage: Tuple[JsonPointer, ...] = (),
    ) -> Optional[Tuple[Dict[str, Any], JsonPointer]]:
        """Resolve ``container[key]`` and replace a reference with a copy of its target.

        ``lineage`` holds the locations of the schemas on the active path; a
        reference resolving to one of them is recursive and yields None.
        """
        schema = container.get(key)
        resolved = self.resolve(schema, yaml_path)
        if resolved is None:
            logger.debug(f"Skipping unresolvable schema at {yaml_path}: {schema!r}")
            return None
        target, target_path = resolved
        if target is schema:
            return resolved
        if target_path in lineage:
            logger.debug(f"Skipping recursive reference at {yaml_path}: {schema!r}")
            return None
        target = copy.deepcopy(target)
        container[key] = target
        return target, target_path


@dataclass
class SchemaNode:
    """A schema visited by the traversal.

    ``name`` is the dotted qualified path used in diagnostics and ``key`` the
    property (or component) name it ends with; ``yaml_path`` is the JSON
    pointer of the concrete schema inside the document. ``lineage`` lists the
    ``yaml_path`` of every schema from the root down to this one.
    """

    name: str
    key: str
    schema: Dict[str, Any]
    yaml_path: JsonPointer
    resolver: RefResolver
    separator: str = "."
    lineage: Tuple[JsonPointer, ...] = ()

    @property
    def required(self) -> List[str]:
        required = self.schema.get("required")
        return [name for name in required if isinstance(name, str)] if isinstance(required, list) else []

    def qualify(self, property_name: str) -> str:
        return f"{self.name}{self.separator}{property_name}"

    def iter_properties(self) -> Iterator[SchemaNode]:
        """Direct properties whose schema resolves, in declaration order."""
        properties = self.schema.get("properties")
        if not isinstance(properties, dict):
            return
        # Snapshot names: inlining rewrites values while iterating.
        for prop_name in list(properties):
            prop_path = join_pointer(self.yaml_path, "properties", str(prop_name))
            resolved = self.resolver.inline(properties, prop_name, prop_path, self.lineage)
            if resolved is None:
                continue
            schema, concrete_path = resolved
            yield SchemaNode(
                name=self.qualify(str(prop_name)),
                key=str(prop_name),
                schema=schema,
                yaml_path=concrete_path,
                resolver=self.resolver,
                separator=self.separator,
                lineage=self.lineage + (concrete_path,),
            )


def iter_component_nodes(document: Dict[str, Any], separator: str = ".") -> Iterator[SchemaNode]:
    """Root nodes: one per entry of ``components.schemas``."""
    components = document.get("components")
    schemas = components.get("schemas") if isinstance(components, dict) else None
    if not isinstance(schemas, dict):
        return

    resolver = RefResolver(document)
    for name in list(schemas):
        resolved = resolver.inline(schemas, name, join_pointer("/components/schemas", str(name)))
        if resolved is None:
            continue
        schema, yaml_path = resolved
        yield SchemaNode(
            name=str(name),
            key=str(name),
            schema=schema,
            yaml_path=yaml_path,
            resolver=resolver,
            separator=separator,
            lineage=(yaml_path,),
        )


def iter_children(node: SchemaNode) -> Iterator[SchemaNode]:
    return node.iter_properties()
