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

"""Result reporting for enrichment runs."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

OUTPUT_FORMATS = ('human', 'json', 'github-actions')


class EnrichmentReport:
    """Container for the outcome of one enrichment pass over a document."""

    def __init__(self, file_path: Optional[Path] = None):
        """Initialize an empty report.

        Args:
            file_path: Path of the document being enriched, if it came from disk
        """
        self.file_path = file_path
        self.visited_nodes = 0
        # qualified property path -> written rule string
        self.enriched: Dict[str, str] = {}
        # properties whose validation slot was removed
        self.cleared: List[str] = []
        self.errors: List[Dict[str, Any]] = []

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(
        self,
        message: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        yaml_path: Optional[str] = None,
    ):
        """Add an error message.

        Args:
            message: Error message
            path: Qualified property path the error belongs to
            line: Optional 1-based line of the offending schema
            column: Optional 1-based column of the offending schema
            yaml_path: Optional JSON pointer of the offending schema
        """
        error: Dict[str, Any] = {'message': message}
        if path is not None:
            error['path'] = path
        if line is not None:
            error['line'] = line
        if column is not None:
            error['column'] = column
        if yaml_path is not None:
            error['yaml_path'] = yaml_path
        self.errors.append(error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path) if self.file_path else None,
            'visited': self.visited_nodes,
            'enriched': len(self.enriched),
            'cleared': len(self.cleared),
            'errors': self.errors,
        }


def render_report(report: EnrichmentReport, output_format: str = 'human') -> str:
    """Render a report in one of OUTPUT_FORMATS."""
    if output_format == 'json':
        return json.dumps(report.to_dict(), indent=2)

    file_name = report.file_path or '<document>'
    if output_format == 'github-actions':
        return "\n".join(
            f"::error file={file_name},line={error.get('line', 1)}::{error['message']}"
            for error in report.errors
        )

    # human-readable
    if report.ok:
        return (
            f"Enriched {len(report.enriched)} propert(ies) across "
            f"{report.visited_nodes} schema(s) in {file_name}."
        )
    lines = [f"{file_name}:"]
    for error in report.errors:
        line_info = f":{error['line']}" if 'line' in error else ""
        lines.append(f"  ERROR{line_info}: {error['message']}")
    return "\n".join(lines)
