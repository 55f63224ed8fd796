from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

import jsonschema

from .json_schema_loader import load_schema

DOCUMENT_SCHEMA = "openapi_document"

JsonPointer = str


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[JsonPointer] = None


def _pointer(path) -> JsonPointer:
    return "/" + "/".join(str(p).replace("~", "~0").replace("/", "~1") for p in path) if path else ""


def validate_document_shape(document: Any, json_schema_dict: Optional[dict] = None) -> List[SchemaIssue]:
    """Check the parts of an OpenAPI document the enricher reads.

    Unlike ``jsonschema.validate`` this collects every issue instead of
    stopping at the first, in document order.
    """
    if not isinstance(document, dict):
        return [SchemaIssue(message="Root must be a mapping/object", yaml_path="")]

    schema = json_schema_dict if json_schema_dict is not None else load_schema(DOCUMENT_SCHEMA)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator = validator_cls(schema)

    errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.absolute_path])
    return [SchemaIssue(message=error.message, yaml_path=_pointer(error.absolute_path)) for error in errors]
