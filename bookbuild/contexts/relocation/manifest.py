"""
Manifest Parsing Module

Extracts content file paths from a book manifest (SUMMARY.md). A manifest line
references a file with a relative link such as:

    - [Intro](./intro.md)

The entry is everything after the "(./" marker up to the line's last
character, so the line above yields "intro.md".
"""

from pathlib import Path
from typing import List, Optional

from bookbuild.contexts.relocation.logger import log_manifest_parsed
from bookbuild.exceptions import ManifestError

MANIFEST_MARKER = "(./"


def extract_manifest_entry(line: str) -> Optional[str]:
    """
    Extract the relative path referenced by one manifest line.

    Args:
        line: A single manifest line without its line terminator

    Returns:
        Text between the first marker and the line's last character, or
        None if the line has no marker

    Examples:
        extract_manifest_entry("- [Intro](./intro.md)")        # "intro.md"
        extract_manifest_entry("- [Guide](./guide/setup.md)")  # "guide/setup.md"
        extract_manifest_entry("# Summary")                    # None
    """
    index = line.find(MANIFEST_MARKER)
    if index == -1:
        return None
    return line[index + len(MANIFEST_MARKER) : len(line) - 1]


def parse_manifest_text(text: str) -> List[str]:
    """
    Extract every entry from manifest text, in line order.

    Duplicates are preserved.
    """
    entries = []
    for line in text.splitlines():
        entry = extract_manifest_entry(line)
        if entry is not None:
            entries.append(entry)
    return entries


def parse_manifest(manifest_path: Path) -> List[str]:
    """
    Read a manifest file and extract its entries.

    Args:
        manifest_path: Path to the manifest (e.g., <root>/src/SUMMARY.md)

    Returns:
        Ordered list of relative paths referenced by the manifest

    Raises:
        ManifestError: If the manifest cannot be opened or read
    """
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError("Failed to read manifest", path=manifest_path, original_error=e) from e

    entries = parse_manifest_text(text)
    log_manifest_parsed(manifest_path, entries)
    return entries
