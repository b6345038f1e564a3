#!/usr/bin/env python3
"""
Book Build CLI

Tests and renders the book in the current directory with the external
documentation tool, relocating content files around the render.

Takes no arguments. Behavior is configured through bookbuild.yaml in the
project root and environment variables (BOOK_TOOL, BOOK_RUN_TESTS,
BOOK_COLLECT_HTML, BOOK_CAPTURE_OUTPUT, BOOKBUILD_LOGS_PATH), which may also
come from a .env file in the project root.

Examples:\n

    build-book                         # Build the book in the current directory

    BOOK_RUN_TESTS=true build-book     # Run the tool's tests first
"""

from pathlib import Path

import typer

from bookbuild.contexts.rendering import build_book, resolve_project_root
from bookbuild.contexts.rendering.logger import setup_rendering_logger
from bookbuild.exceptions import BuildError
from bookbuild.utils.config import load_build_config
from bookbuild.utils.timestamp import format_elapsed, now

app = typer.Typer(
    help="Test and render a documentation book with the content relocation workaround",
    add_completion=False,
)


@app.command()
def main():
    """
    Build the book in the current directory.

    Exits with code 0 on success and 1 on the first failing stage.
    """
    typer.echo("Building start...")

    try:
        root = resolve_project_root()
        config = load_build_config(root)

        log_dir = None
        if config.log_dir:
            log_dir = root / config.log_dir / f"build_{now()}"
        log_file = setup_rendering_logger(log_dir, tool=config.tool)

        result = build_book(root, config)
    except BuildError as e:
        typer.secho(f"\n✗ Build failed at stage '{e.stage}'", fg=typer.colors.RED, bold=True, err=True)
        typer.secho(f"  {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho("✓ Building complete.", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Relocated files: {len(result.relocations)}")
    if config.collect_html:
        typer.echo(f"  Collected HTML files: {len(result.collected_html)}")
    typer.echo(f"  Elapsed: {format_elapsed(result.elapsed_time)}")
    if log_file:
        typer.echo(f"  Log: {display_path(log_file, root)}")


def display_path(path: Path, root: Path) -> str:
    """Return path relative to root for cleaner display."""
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    app()
