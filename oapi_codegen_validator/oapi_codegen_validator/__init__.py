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

"""Enrich OpenAPI documents with go-playground validation rules."""

__version__ = "0.1.0"

from .enricher import enrich_document
from .exceptions import (
    EnrichmentError,
    InvalidPatternError,
    PropertyEnrichmentError,
    RuleConflictError,
    UnsupportedConstraintError,
    ValidatorEnricherError,
)

__all__ = [
    'enrich_document',
    'EnrichmentError',
    'InvalidPatternError',
    'PropertyEnrichmentError',
    'RuleConflictError',
    'UnsupportedConstraintError',
    'ValidatorEnricherError',
]
