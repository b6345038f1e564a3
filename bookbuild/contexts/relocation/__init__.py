"""
Relocation Context

Responsibilities:
- Reads the manifest for the list of content files
- Moves each listed file one directory level deeper before rendering
- Moves every relocated file back after a successful render

Owns: Manifest parsing, move-out/move-back of content files
Never: Invokes the external tool
"""

from bookbuild.contexts.relocation.manifest import (
    MANIFEST_MARKER,
    extract_manifest_entry,
    parse_manifest,
    parse_manifest_text,
)
from bookbuild.contexts.relocation.relocator import (
    RelocationPair,
    plan_relocations,
    relocate_files,
    restore_files,
)

__all__ = [
    # Manifest parsing
    "MANIFEST_MARKER",
    "extract_manifest_entry",
    "parse_manifest",
    "parse_manifest_text",
    # Move-out / move-back
    "RelocationPair",
    "plan_relocations",
    "relocate_files",
    "restore_files",
]
