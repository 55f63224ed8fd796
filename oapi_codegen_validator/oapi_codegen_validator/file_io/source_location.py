from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

SourceMap = Dict[str, Dict[str, int]]


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    yaml_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def lookup_source(
    source_map: Optional[SourceMap], yaml_path: Optional[str], file_path: Optional[Path] = None
) -> SourceLocation:
    """Locate a JSON pointer in the loaded file, falling back to its nearest located ancestor."""
    if not source_map or yaml_path is None:
        return SourceLocation(file_path=file_path, yaml_path=yaml_path)

    probe = yaml_path
    while True:
        entry = source_map.get(probe)
        if entry:
            return SourceLocation(
                file_path=file_path,
                yaml_path=yaml_path,
                line=entry.get("line"),
                column=entry.get("column"),
            )
        if not probe:
            return SourceLocation(file_path=file_path, yaml_path=yaml_path)
        probe = probe.rsplit("/", 1)[0]


def format_source(loc: Optional[SourceLocation]) -> str:
    """Render a location as a message suffix, e.g. ' (source= api.yaml:12:7 yaml_path= /components/schemas/User)'."""
    if not loc:
        return ""

    parts = []
    if loc.file_path is not None:
        position = "".join(f":{n}" for n in (loc.line, loc.column) if n is not None)
        parts.append(f"source= {loc.file_path}{position}")
    if loc.yaml_path:
        parts.append(f"yaml_path= {loc.yaml_path}")

    return f" ({' '.join(parts)})" if parts else ""
