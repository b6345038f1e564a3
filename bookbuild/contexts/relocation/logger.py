"""
Relocation context logger.

Provides logging interface for relocation context with automatic [relocate] prefix.
All relocation modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[relocate]"


# Wrapper functions with automatic [relocate] prefix


def _log_info(message: str) -> None:
    """Log info message with [relocate] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [relocate] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [relocate] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [relocate] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level relocation-specific logging helpers


def log_manifest_parsed(manifest_path: Path, entries: list) -> None:
    """Log the outcome of manifest parsing."""
    _log_info(f"Manifest {manifest_path.name}: {len(entries)} entries")
    for entry in entries:
        _log_debug(f"  Entry: {entry}")


def log_move(source: Path, destination: Path) -> None:
    """Log a single file move."""
    _log_debug(f"  {source} -> {destination}")
