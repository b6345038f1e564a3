"""
Book Build Pipeline

Runs the build stages strictly in sequence:

    START -> TESTING_DONE -> FILES_RELOCATED -> RENDER_DONE
          -> FILES_RESTORED [-> HTML_COLLECTED] -> COMPLETE

Any failure raises immediately. Nothing is rolled back, so a failed render
leaves the relocated files in their temporary location.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from bookbuild.contexts.relocation import (
    RelocationPair,
    parse_manifest,
    plan_relocations,
    relocate_files,
    restore_files,
)
from bookbuild.contexts.rendering.collector import collect_html
from bookbuild.contexts.rendering.logger import _log_debug, _log_info, _log_success
from bookbuild.contexts.rendering.runner import CommandResult, run_external
from bookbuild.exceptions import BuildError
from bookbuild.utils.config import BuildConfig


class BuildStage(Enum):
    """Furthest point a build run has reached."""

    START = "start"
    TESTING_DONE = "testing_done"
    FILES_RELOCATED = "files_relocated"
    RENDER_DONE = "render_done"
    FILES_RESTORED = "files_restored"
    HTML_COLLECTED = "html_collected"
    COMPLETE = "complete"


@dataclass
class BuildResult:
    """
    Outcome of a successful build run.

    Attributes:
        root: Project root the build ran in
        stage: Final stage reached (COMPLETE on return from build_book)
        relocations: Pairs that were moved out and back
        collected_html: New locations of stray HTML files (empty unless enabled)
        commands: Results of the external commands, in run order
        elapsed_time: Total wall-clock seconds
    """

    root: Path
    stage: BuildStage = BuildStage.START
    relocations: List[RelocationPair] = field(default_factory=list)
    collected_html: List[Path] = field(default_factory=list)
    commands: List[CommandResult] = field(default_factory=list)
    elapsed_time: float = 0.0


def resolve_project_root() -> Path:
    """
    Read the current working directory once, as the project root.

    Raises:
        BuildError: If the working directory no longer exists
    """
    try:
        return Path.cwd()
    except OSError as e:
        raise BuildError(
            "Current working directory does not exist", stage="startup", original_error=e
        ) from e


def build_book(root: Path, config: Optional[BuildConfig] = None) -> BuildResult:
    """
    Test, relocate, render and restore a book.

    Args:
        root: Absolute project root; every path is resolved against it
        config: Build settings (defaults to BuildConfig())

    Returns:
        BuildResult with stage COMPLETE

    Raises:
        BuildError: From the first failing stage
    """
    if config is None:
        config = BuildConfig()

    result = BuildResult(root=root)
    start_time = time.time()

    if config.run_tests:
        result.commands.append(
            run_external(
                config.tool,
                config.test_args,
                cwd=root,
                stage="testing",
                capture_output=config.capture_output,
            )
        )
    else:
        _log_debug("Testing disabled, skipping")
    result.stage = BuildStage.TESTING_DONE

    entries = parse_manifest(root / config.manifest)
    result.relocations = plan_relocations(
        root, entries, content_dir=config.content_dir, nested_dir=config.nested_dir
    )
    relocate_files(result.relocations)
    result.stage = BuildStage.FILES_RELOCATED

    result.commands.append(
        run_external(
            config.tool,
            config.build_args,
            cwd=root,
            stage="rendering",
            capture_output=config.capture_output,
        )
    )
    result.stage = BuildStage.RENDER_DONE

    restore_files(result.relocations)
    result.stage = BuildStage.FILES_RESTORED

    if config.collect_html:
        result.collected_html = collect_html(root, book_dir=config.book_dir)
        result.stage = BuildStage.HTML_COLLECTED

    result.elapsed_time = time.time() - start_time
    result.stage = BuildStage.COMPLETE
    _log_success(f"Build complete ({result.elapsed_time:.2f}s)")
    _log_info(f"Output: {root / config.book_dir}")

    return result
