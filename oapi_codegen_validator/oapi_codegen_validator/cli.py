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

"""CLI entry point for enriching OpenAPI documents with validation rules."""

import argparse
import sys
from pathlib import Path
from typing import List

from .config import PATTERN_POLICIES, enricher_config
from .enricher import enrich_document
from .exceptions import ConfigurationError, DocumentError, EnrichmentError
from .file_io.document_io import load_document, write_document
from .file_io.source_location import SourceMap, format_source, lookup_source
from .report import OUTPUT_FORMATS, EnrichmentReport, render_report


EXIT_OK = 0
EXIT_ENRICHMENT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='oapi-codegen-validator',
        description='Add go-playground validate rules to the schema properties of an OpenAPI document',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--input', '-i', required=True, help='Input OpenAPI file path (YAML or JSON)')
    parser.add_argument('--output', '-o', help='Output enriched OpenAPI file path (.json writes JSON)')
    parser.add_argument(
        '--check',
        action='store_true',
        help='Enrich in memory and report errors without writing any output',
    )
    parser.add_argument(
        '--pattern-policy',
        choices=PATTERN_POLICIES,
        default=None,
        help=f'How `pattern` is handled (default: {enricher_config.pattern_policy})',
    )
    parser.add_argument(
        '--format',
        choices=OUTPUT_FORMATS,
        default='human',
        help='Report format (default: human)',
    )
    parser.add_argument('--log-level', default=None, help=f'Log level (default: {enricher_config.log_level})')
    return parser


def _report_from_failure(exc: EnrichmentError, input_path: Path, source_map: SourceMap) -> EnrichmentReport:
    report = exc.report if isinstance(exc.report, EnrichmentReport) else EnrichmentReport()
    report.file_path = input_path
    for error in exc.errors:
        loc = lookup_source(source_map, error.yaml_path, file_path=input_path)
        report.add_error(
            f"{error}{format_source(loc)}",
            path=error.path,
            line=loc.line,
            column=loc.column,
            yaml_path=error.yaml_path,
        )
    return report


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the enricher CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.check and not args.output:
        parser.error('--output is required unless --check is given')

    # Machine-readable reports own stdout.
    log_level = args.log_level or ('WARNING' if args.format != 'human' else None)
    config = enricher_config.with_overrides(pattern_policy=args.pattern_policy, log_level=log_level)
    try:
        config.validate()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)
    config.set_logging()

    input_path = Path(args.input)
    try:
        document, source_map = load_document(input_path)
    except DocumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    try:
        report = enrich_document(document, config)
    except EnrichmentError as e:
        # Never persist a partially enriched document.
        print(render_report(_report_from_failure(e, input_path, source_map), args.format))
        sys.exit(EXIT_ENRICHMENT_FAILED)

    report.file_path = input_path
    if not args.check:
        try:
            write_document(document, args.output)
        except DocumentError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(EXIT_USAGE)

    if args.format != 'github-actions':
        print(render_report(report, args.format))
    sys.exit(EXIT_OK)


if __name__ == '__main__':
    main()
