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

"""Configuration management for the validation-rule enricher."""

import os
import logging
from dataclasses import dataclass, replace
from typing import Any

from .exceptions import ConfigurationError
from .utils.logging_utils import DEFAULT_FORMAT, configure_split_stream_logging

ENV_PREFIX = "OAPI_CODEGEN_VALIDATOR_"

# How a `pattern` keyword is handled by the rule generator.
PATTERN_POLICY_REGEX = "regex"
PATTERN_POLICY_REJECT = "reject"
PATTERN_POLICIES = (PATTERN_POLICY_REGEX, PATTERN_POLICY_REJECT)


@dataclass
class EnricherConfig:
    """Configuration class for one enrichment run."""
    log_level: str = "INFO"
    print_level: str = "WARNING"
    pattern_policy: str = PATTERN_POLICY_REGEX

    # extension slot the rules are written to
    extension_key: str = "x-oapi-codegen-extra-tags"
    validate_key: str = "validate"

    # qualified path separator, diagnostics only
    path_separator: str = "."

    @classmethod
    def from_env(cls) -> 'EnricherConfig':
        """Create configuration from environment variables."""
        defaults = cls()
        return cls(
            log_level=os.getenv(f'{ENV_PREFIX}LOG_LEVEL', defaults.log_level),
            print_level=os.getenv(f'{ENV_PREFIX}PRINT_LEVEL', defaults.print_level),
            pattern_policy=os.getenv(f'{ENV_PREFIX}PATTERN_POLICY', defaults.pattern_policy).lower(),
            extension_key=os.getenv(f'{ENV_PREFIX}EXTENSION_KEY', defaults.extension_key),
            validate_key=os.getenv(f'{ENV_PREFIX}VALIDATE_KEY', defaults.validate_key),
            path_separator=os.getenv(f'{ENV_PREFIX}PATH_SEPARATOR', defaults.path_separator),
        )

    def with_overrides(self, **overrides: Any) -> 'EnricherConfig':
        """Return a copy with the non-None overrides applied (CLI flags win over env)."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    def validate(self) -> None:
        if self.pattern_policy not in PATTERN_POLICIES:
            raise ConfigurationError(
                f"Unknown pattern policy '{self.pattern_policy}'. Valid policies: {list(PATTERN_POLICIES)}"
            )
        if not self.extension_key or not self.validate_key:
            raise ConfigurationError("Extension key and validate key must be non-empty strings")

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        formatter = logging.Formatter(DEFAULT_FORMAT)
        configure_split_stream_logging(
            level=self.log_level, stderr_level=self.print_level, formatter=formatter
        )

        return logging.getLogger('oapi_codegen_validator')


# Global configuration instance
enricher_config = EnricherConfig.from_env()
