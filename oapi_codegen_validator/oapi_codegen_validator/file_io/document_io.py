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

"""OpenAPI document reading and writing (YAML or JSON)."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml

from ..exceptions import DocumentError
from ..models.document_schema import validate_document_shape
from ..models.schema_graph import json_pointer_escape
from .source_location import SourceMap, format_source, lookup_source

logger = logging.getLogger(__name__)

JSON_SUFFIXES = ('.json',)


class _NoAliasDumper(yaml.SafeDumper):
    """Dumper that writes shared objects out in full.

    YAML input with anchors loads as shared objects; anchors and aliases on
    output would be valid YAML but unreadable to OpenAPI tooling.
    """

    def ignore_aliases(self, data: Any) -> bool:
        return True


def build_source_map(content: str) -> SourceMap:
    """Build a mapping from JSON pointers to 1-based line/column.

    Uses PyYAML's node tree (yaml.compose), which also accepts JSON, so
    locations are tracked without changing the data returned by safe_load.
    """
    source_map: SourceMap = {}

    try:
        root = yaml.compose(content, Loader=yaml.SafeLoader)
    except yaml.YAMLError:
        # Parsing errors are reported by the loader itself.
        return source_map

    if root is None:
        return source_map

    def _walk(node, path: str) -> None:
        mark = getattr(node, "start_mark", None)
        if mark is not None:
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

        if isinstance(node, yaml.nodes.MappingNode):
            for key_node, value_node in node.value:
                key = getattr(key_node, "value", None)
                if key is None:
                    continue
                _walk(value_node, f"{path}/{json_pointer_escape(str(key))}")
        elif isinstance(node, yaml.nodes.SequenceNode):
            for idx, item_node in enumerate(node.value):
                _walk(item_node, f"{path}/{idx}")

    _walk(root, "")
    return source_map


def load_document_from_string(content: str, check_shape: bool = True) -> Tuple[Dict[str, Any], SourceMap]:
    """Parse a YAML or JSON document and return (document, source_map).

    Raises:
        DocumentError: If the content cannot be parsed or has the wrong shape
    """
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise DocumentError(f"Failed to parse document: {exc}") from exc

    if document is None:
        document = {}

    source_map = build_source_map(content)

    if check_shape:
        issues = validate_document_shape(document)
        if issues:
            details = "\n".join(
                f"  - {issue.message}{format_source(lookup_source(source_map, issue.yaml_path))}"
                for issue in issues
            )
            raise DocumentError(f"Document is not a valid OpenAPI 3 document:\n{details}")

    return document, source_map


def load_document(file_path: Union[str, Path], check_shape: bool = True) -> Tuple[Dict[str, Any], SourceMap]:
    """Load an OpenAPI document file and return (document, source_map).

    source_map keys are JSON pointers (e.g. "/components/schemas/User").
    Values contain 1-based line/column.

    Raises:
        DocumentError: If the file cannot be read, parsed, or has the wrong shape
    """
    path = Path(file_path)

    if not path.exists():
        raise DocumentError(f"Document not found: {path}")

    if not path.is_file():
        raise DocumentError(f"Path is not a file: {path}")

    logger.info(f"Loading document: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentError(f"Failed to read document {path}: {exc}") from exc

    try:
        return load_document_from_string(content, check_shape=check_shape)
    except DocumentError as exc:
        raise DocumentError(f"{path}: {exc}") from exc


def dump_document(document: Dict[str, Any], as_json: bool = False) -> str:
    """Serialize a document, keeping key order and writing no YAML aliases."""
    if as_json:
        return json.dumps(document, indent=2, ensure_ascii=False, default=str) + "\n"
    return yaml.dump(
        document,
        Dumper=_NoAliasDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def write_document(document: Dict[str, Any], file_path: Union[str, Path]) -> None:
    """Write a document; ``.json`` files get JSON, anything else YAML.

    Raises:
        DocumentError: If the file cannot be written
    """
    path = Path(file_path)
    content = dump_document(document, as_json=path.suffix.lower() in JSON_SUFFIXES)

    logger.info(f"Writing document: {path}")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise DocumentError(f"Failed to write document {path}: {exc}") from exc
