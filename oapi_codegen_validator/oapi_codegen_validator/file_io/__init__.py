"""Document input/output helpers."""

from .document_io import dump_document, load_document, load_document_from_string, write_document
from .source_location import SourceLocation, format_source, lookup_source

__all__ = [
    'dump_document',
    'load_document',
    'load_document_from_string',
    'write_document',
    'SourceLocation',
    'format_source',
    'lookup_source',
]
