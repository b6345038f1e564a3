"""
Stray HTML Collection

Some renderer setups write HTML next to the sources instead of into the book
directory. After rendering, every .html file found outside the book directory
is moved into it, keeping its path relative to the project root.
"""

import shutil
from pathlib import Path
from typing import List

from bookbuild.contexts.rendering.logger import _log_debug, _log_info
from bookbuild.exceptions import RelocationError


def find_stray_html(root: Path, book_dir: str = "book") -> List[Path]:
    """
    Find .html files outside the book directory.

    Directories named book_dir are skipped at any depth, as are directories
    that cannot be listed.

    Args:
        root: Project root to walk
        book_dir: Name of the renderer output directory

    Returns:
        Sorted list of absolute .html file paths
    """
    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        _log_debug(f"  Skipping unreadable directory {root}: {e}")
        return []

    found = []
    for entry in entries:
        if entry.is_dir() and not entry.is_symlink():
            if entry.name != book_dir:
                found.extend(find_stray_html(entry, book_dir))
        elif entry.is_file() and entry.suffix == ".html":
            found.append(entry)
    return found


def collect_html(root: Path, book_dir: str = "book") -> List[Path]:
    """
    Move stray .html files under root into root/book_dir.

    Args:
        root: Project root
        book_dir: Name of the renderer output directory

    Returns:
        New locations of the moved files, in the order they were moved

    Raises:
        RelocationError: On the first failed move
    """
    book_root = root / book_dir
    moved = []

    for source in find_stray_html(root, book_dir):
        destination = book_root / source.relative_to(root)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(source, destination)
        except OSError as e:
            raise RelocationError(
                "Failed to move HTML file into the book directory",
                stage="collect",
                path=source,
                original_error=e,
            ) from e
        _log_debug(f"  {source} -> {destination}")
        moved.append(destination)

    _log_info(f"Collected {len(moved)} HTML files into {book_dir}/")
    return moved
