"""Bundled JSON Schema files.

This package holds data only; see ``models.json_schema_loader``.
"""
