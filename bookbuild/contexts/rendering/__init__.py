"""
Rendering Context

Responsibilities:
- Runs the external documentation tool (test and build sub-commands)
- Sequences the build stages around the relocation workaround
- Collects stray HTML output into the book directory

Owns: External tool invocation, build pipeline, output collection
Never: Modifies content file contents
"""

from bookbuild.contexts.rendering.collector import collect_html, find_stray_html
from bookbuild.contexts.rendering.pipeline import (
    BuildResult,
    BuildStage,
    build_book,
    resolve_project_root,
)
from bookbuild.contexts.rendering.runner import CommandResult, run_external

__all__ = [
    # Build orchestration
    "build_book",
    "resolve_project_root",
    "BuildResult",
    "BuildStage",
    # External tool
    "run_external",
    "CommandResult",
    # Output collection
    "collect_html",
    "find_stray_html",
]
