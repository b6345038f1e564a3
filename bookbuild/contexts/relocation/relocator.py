"""
Content Relocation Module

Moves manifest-listed content files one directory level deeper so the
renderer finds them at its fixed input path, and moves them back afterwards.

There is no rollback: the first failed move aborts with RelocationError and
leaves whatever was already moved where it is.
"""

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List

from bookbuild.contexts.relocation.logger import _log_error, _log_info, _log_success, log_move
from bookbuild.exceptions import RelocationError


@dataclass(frozen=True)
class RelocationPair:
    """
    Where one content file lives normally and where it sits during a render.

    Attributes:
        original: Absolute path under the content directory
        temporary: Absolute path under the nested directory, same relative path
    """

    original: Path
    temporary: Path


def plan_relocations(
    root: Path,
    entries: List[str],
    content_dir: str = ".",
    nested_dir: str = "src",
) -> List[RelocationPair]:
    """
    Compute the relocation pair for every manifest entry.

    Pure path computation; nothing on disk is touched.

    Args:
        root: Absolute project root
        entries: Relative paths from the manifest, in manifest order
        content_dir: Directory holding the content files, relative to root
        nested_dir: Subdirectory of content_dir the renderer reads from

    Returns:
        One RelocationPair per entry, in the same order
    """
    base = root / content_dir
    nested = base / nested_dir
    return [RelocationPair(original=base / entry, temporary=nested / entry) for entry in entries]


def _move(source: Path, destination: Path, stage: str) -> None:
    if not source.is_file():
        _log_error(f"Source file not found: {source}")
        raise RelocationError("Source file not found", stage=stage, path=source)
    if destination.exists():
        _log_error(f"Destination already exists: {destination}")
        raise RelocationError("Destination already exists", stage=stage, path=destination)

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(source, destination)
    except OSError as e:
        _log_error(f"Failed to move {source}")
        raise RelocationError(
            f"Failed to move file to {destination}", stage=stage, path=source, original_error=e
        ) from e

    log_move(source, destination)


def relocate_files(pairs: List[RelocationPair]) -> None:
    """
    Move each original file to its temporary location, in order.

    Args:
        pairs: Output of plan_relocations()

    Raises:
        RelocationError: On the first missing source, occupied destination or
            failed move. Later pairs are not processed.
    """
    if not pairs:
        _log_info("No files to relocate")
        return

    _log_info(f"Relocating {len(pairs)} files")
    for pair in pairs:
        _move(pair.original, pair.temporary, stage="relocate")
    _log_success(f"Relocated {len(pairs)} files")


def restore_files(pairs: List[RelocationPair]) -> None:
    """
    Move each temporary file back to its original location, in order.

    Args:
        pairs: The pairs previously passed to relocate_files()

    Raises:
        RelocationError: On the first failed move; the tree is left
            partially restored.
    """
    if not pairs:
        return

    _log_info(f"Restoring {len(pairs)} files")
    for pair in pairs:
        _move(pair.temporary, pair.original, stage="restore")
    _log_success(f"Restored {len(pairs)} files")
