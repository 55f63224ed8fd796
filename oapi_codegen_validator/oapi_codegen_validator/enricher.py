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

"""Enrichment pass: writes validation rules onto every schema property."""

import logging
from typing import Any, Dict, List, Optional

from .config import EnricherConfig, enricher_config
from .exceptions import EnrichmentError, PropertyEnrichmentError, ValidatorEnricherError
from .models.constraints import ConstraintSet
from .models.extensions import ExtensionMetadata
from .models.schema_graph import SchemaNode, iter_children, iter_component_nodes
from .report import EnrichmentReport
from .rules.generator import generate_rules
from .rules.merger import merge_rules
from .rules.rule_set import OMITEMPTY, REQUIRED, RuleSet, strip_presence_modifiers
from .utils.traversal import pre_order

logger = logging.getLogger(__name__)


def _property_rules(prop: SchemaNode, extensions: ExtensionMetadata, config: EnricherConfig) -> RuleSet:
    stored = strip_presence_modifiers(extensions.read_rules())
    generated = generate_rules(ConstraintSet.from_schema(prop.schema), config.pattern_policy)
    return merge_rules(stored, generated)


def enrich_node(node: SchemaNode, report: EnrichmentReport, config: EnricherConfig) -> List[PropertyEnrichmentError]:
    """Compute and write the rules of every direct property of ``node``.

    A failing property is left untouched and its error returned; the remaining
    properties are still processed.
    """
    errors: List[PropertyEnrichmentError] = []
    required = set(node.required)

    for prop in node.iter_properties():
        extensions = ExtensionMetadata(prop.schema, config.extension_key, config.validate_key)

        try:
            rules = _property_rules(prop, extensions, config)
        except ValidatorEnricherError as exc:
            error = PropertyEnrichmentError(prop.name, exc, yaml_path=prop.yaml_path)
            logger.warning(str(error))
            errors.append(error)
            continue

        # Presence modifier always leads.
        if prop.key in required:
            rules.insert(0, REQUIRED)
        elif rules:
            rules.insert(0, OMITEMPTY)
        else:
            if extensions.raw_rules() is not None:
                report.cleared.append(prop.name)
            extensions.clear_rules()
            logger.debug(f"No rules for {prop.name}")
            continue

        extensions.write_rules(rules)
        report.enriched[prop.name] = extensions.raw_rules()
        logger.debug(f"Rules for {prop.name}: {report.enriched[prop.name]}")

    return errors


def enrich_document(document: Dict[str, Any], config: Optional[EnricherConfig] = None) -> EnrichmentReport:
    """Enrich every component schema of an OpenAPI document in place.

    Every node and property is visited even after failures. The document must
    not be persisted when this raises.

    Raises:
        EnrichmentError: one or more properties failed; carries all of them.
    """
    config = config or enricher_config
    config.validate()

    report = EnrichmentReport()
    errors: List[PropertyEnrichmentError] = []

    for node in pre_order(iter_component_nodes(document, config.path_separator), iter_children):
        report.visited_nodes += 1
        errors.extend(enrich_node(node, report, config))

    logger.info(
        f"Visited {report.visited_nodes} schema(s): {len(report.enriched)} propert(ies) enriched, "
        f"{len(report.cleared)} cleared, {len(errors)} error(s)"
    )

    if errors:
        raise EnrichmentError(errors, report=report)
    return report
