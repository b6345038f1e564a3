"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from bookbuild.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Optional[Path], tool: str) -> Optional[Path]:
    """
    Setup logger for a build run.

    Configures loguru with provenance tracking and the external tool in use.

    Args:
        log_dir: Directory for this build session (None for console only)
        tool: External documentation tool

    Returns:
        Path to log file, or None when logging to console only
    """
    return _setup_logger(
        context_name="build",
        log_dir=log_dir,
        extra_provenance={"Tool": tool},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_command_start(stage: str, command: list, cwd: Path) -> None:
    """Log start of an external command with context."""
    _log_info(f"{stage.capitalize()}...")
    _log_debug(f"  Command: {' '.join(command)}")
    _log_debug(f"  Working directory: {cwd}")


def log_command_result(stage: str, result) -> None:
    """
    Log the outcome of an external command.

    Args:
        stage: Stage name ("testing", "rendering")
        result: CommandResult from run_external()
    """
    if result.returncode == 0:
        _log_success(f"{stage.capitalize()}...Done. ({result.elapsed_time:.2f}s)")
    else:
        _log_error(f"{stage.capitalize()} failed with exit code {result.returncode}")

    # Use opt(raw=True) so multi-line tool output keeps its own formatting
    if result.stdout:
        logger.opt(raw=True).debug(f"\n{'=' * 80}\nSTDOUT:\n{'=' * 80}\n{result.stdout}\n")
    if result.stderr:
        logger.opt(raw=True).debug(f"\n{'=' * 80}\nSTDERR:\n{'=' * 80}\n{result.stderr}\n")
