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

"""Custom exceptions for the OpenAPI validation-rule enricher."""

from typing import Any, List, Optional, Sequence


class ValidatorEnricherError(Exception):
    """Base exception for enricher related errors."""
    pass


class DocumentError(ValidatorEnricherError):
    """Exception raised when a document cannot be loaded, parsed or written."""
    pass


class ConfigurationError(ValidatorEnricherError):
    """Exception raised for invalid enricher configuration."""
    pass


class RuleGenerationError(ValidatorEnricherError):
    """Exception raised when constraints cannot be translated into rules."""
    pass


class UnsupportedConstraintError(RuleGenerationError):
    """Exception raised for a schema keyword the generator refuses to translate."""

    def __init__(self, keyword: str):
        self.keyword = keyword
        super().__init__(
            f"validation keyword '{keyword}' is not supported by auto-enricher; "
            "please implement custom validation or add manual rules"
        )


class InvalidPatternError(RuleGenerationError):
    """Exception raised when a pattern is not usable by the RE2 validation engine."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(
            f"validation keyword 'pattern' '{pattern}' is not a valid RE2 regex: {reason}"
        )


class RuleConflictError(ValidatorEnricherError):
    """Exception raised when a stored rule disagrees with a generated rule of the same key."""

    def __init__(self, key: str, existing: str, generated: str):
        self.key = key
        self.existing = existing
        self.generated = generated
        super().__init__(
            f"conflict on '{key}': manual rule '{existing}' differs from generated rule '{generated}'"
        )


class PropertyEnrichmentError(ValidatorEnricherError):
    """A per-property failure, tagged with the property's qualified path."""

    def __init__(self, path: str, cause: Exception, yaml_path: Optional[str] = None):
        self.path = path
        self.cause = cause
        self.yaml_path = yaml_path
        super().__init__(f"property {path}: {cause}")


class EnrichmentError(ValidatorEnricherError):
    """Aggregate of every per-property failure collected during one pass."""

    def __init__(self, errors: Sequence[PropertyEnrichmentError], report: Optional[Any] = None):
        self.errors: List[PropertyEnrichmentError] = list(errors)
        # partial EnrichmentReport of the failed pass
        self.report = report
        lines = "\n".join(f"  - {error}" for error in self.errors)
        super().__init__(f"enrichment failed with {len(self.errors)} error(s):\n{lines}")

    @property
    def paths(self) -> List[str]:
        return [error.path for error in self.errors]
