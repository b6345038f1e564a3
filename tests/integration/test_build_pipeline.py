"""
Integration tests for the build pipeline and CLI.

A small Python script plays the documentation tool. Its "build" command fails
unless every file named on its command line is present under src/, which is
exactly what the relocation workaround has to guarantee.
"""

import json
import sys

import pytest
from loguru import logger
from typer.testing import CliRunner

from bookbuild.cli import app
from bookbuild.contexts.rendering.pipeline import BuildStage, build_book
from bookbuild.exceptions import ExternalCommandError, ManifestError, RelocationError
from bookbuild.utils.config import BuildConfig

FAKE_TOOL = """
import sys
from pathlib import Path

command = sys.argv[1]
if command == "test":
    Path("tested.txt").write_text("ok")
    sys.exit(0)
if command == "build":
    missing = [name for name in sys.argv[2:] if not (Path("src") / name).is_file()]
    if missing:
        print("not found under src/: " + ", ".join(missing))
        sys.exit(2)
    Path("book").mkdir(exist_ok=True)
    Path("book", "index.html").write_text("<html></html>")
    print("built " + str(len(sys.argv) - 2) + " chapters")
    Path("stray.html").write_text("<p>stray</p>")
    sys.exit(0)
sys.exit(1)
"""

MANIFEST = """# Summary

- [Intro](./intro.md)
- [Guide](./guide/setup.md)
"""

ENTRIES = ["intro.md", "guide/setup.md"]


def content_snapshot(root):
    """Map of relative path -> content for every file outside book/."""
    return {
        str(p.relative_to(root)): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file() and "book" not in p.relative_to(root).parts
    }


@pytest.fixture
def fake_tool(tmp_path):
    tool = tmp_path / "tools" / "fake_mdbook.py"
    tool.parent.mkdir()
    tool.write_text(FAKE_TOOL, encoding="utf-8")
    return tool


@pytest.fixture
def book_root(tmp_path):
    root = tmp_path / "mybook"
    (root / "src").mkdir(parents=True)
    (root / "guide").mkdir()
    (root / "src" / "SUMMARY.md").write_text(MANIFEST, encoding="utf-8")
    (root / "intro.md").write_text("# Intro\n", encoding="utf-8")
    (root / "guide" / "setup.md").write_text("# Setup\n", encoding="utf-8")
    return root


def make_config(fake_tool, build_command="build", **overrides):
    return BuildConfig(
        tool=sys.executable,
        test_args=[str(fake_tool), "test"],
        build_args=[str(fake_tool), build_command, *ENTRIES],
        **overrides,
    )


@pytest.mark.integration
def test_build_restores_content_layout(book_root, fake_tool):
    """Test a full build: tool sees files under src/, files end where they started."""
    before = content_snapshot(book_root)

    result = build_book(book_root, make_config(fake_tool))

    assert result.stage == BuildStage.COMPLETE
    assert len(result.relocations) == 2
    assert (book_root / "book" / "index.html").exists()
    # Only the tool's own stray output is new outside book/
    after = content_snapshot(book_root)
    after.pop("stray.html")
    assert after == before
    assert not (book_root / "tested.txt").exists()


@pytest.mark.integration
def test_build_runs_tests_when_enabled(book_root, fake_tool):
    """Test that the test stage runs first when configured."""
    result = build_book(book_root, make_config(fake_tool, run_tests=True))

    assert (book_root / "tested.txt").exists()
    assert [r.command[2] for r in result.commands] == ["test", "build"]


@pytest.mark.integration
def test_failed_test_stage_stops_before_relocation(book_root, fake_tool):
    """Test that a failing test command aborts with the content untouched."""
    config = make_config(fake_tool, run_tests=True)
    config.test_args = [str(fake_tool), "unknown"]
    before = content_snapshot(book_root)

    with pytest.raises(ExternalCommandError) as exc_info:
        build_book(book_root, config)

    assert exc_info.value.stage == "testing"
    assert content_snapshot(book_root) == before


@pytest.mark.integration
def test_failed_render_leaves_files_relocated(book_root, fake_tool):
    """Test that a build exiting 1 aborts before restoration."""
    with pytest.raises(ExternalCommandError) as exc_info:
        build_book(book_root, make_config(fake_tool, build_command="explode"))

    assert exc_info.value.returncode == 1
    assert exc_info.value.stage == "rendering"
    assert (book_root / "src" / "intro.md").exists()
    assert (book_root / "src" / "guide" / "setup.md").exists()
    assert not (book_root / "intro.md").exists()


@pytest.mark.integration
def test_missing_content_file_aborts(book_root, fake_tool):
    """Test that a manifest entry without a file aborts before rendering."""
    (book_root / "intro.md").unlink()

    with pytest.raises(RelocationError) as exc_info:
        build_book(book_root, make_config(fake_tool))

    assert exc_info.value.path == book_root / "intro.md"
    assert (book_root / "guide" / "setup.md").exists()
    assert not (book_root / "book").exists()


@pytest.mark.integration
def test_missing_manifest_aborts(book_root, fake_tool):
    """Test that a missing manifest aborts before rendering."""
    (book_root / "src" / "SUMMARY.md").unlink()

    with pytest.raises(ManifestError):
        build_book(book_root, make_config(fake_tool))

    assert not (book_root / "book").exists()


@pytest.mark.integration
def test_collect_html_after_render(book_root, fake_tool):
    """Test that stray HTML is moved into book/ when collection is enabled."""
    result = build_book(book_root, make_config(fake_tool, collect_html=True))

    assert result.collected_html == [book_root / "book" / "stray.html"]
    assert not (book_root / "stray.html").exists()
    assert (book_root / "book" / "index.html").exists()


@pytest.mark.integration
def test_capture_output_keeps_tool_output(book_root, fake_tool):
    """Test that capture_output puts the tool's output on the command results."""
    result = build_book(book_root, make_config(fake_tool, capture_output=True))

    assert result.commands[-1].stdout.strip() == "built 2 chapters"


class TestCli:
    """Tests for the build-book command."""

    @pytest.fixture(autouse=True)
    def isolated(self, monkeypatch, book_root):
        for name in [
            "BOOK_TOOL",
            "BOOK_RUN_TESTS",
            "BOOK_COLLECT_HTML",
            "BOOK_CAPTURE_OUTPUT",
            "BOOKBUILD_LOGS_PATH",
            "BOOKBUILD_CONFIG",
        ]:
            monkeypatch.delenv(name, raising=False)
        monkeypatch.chdir(book_root)
        yield
        # The CLI points loguru at the runner's stdout, which is closed afterwards
        logger.remove()
        logger.add(sys.stderr)

    def write_config(self, book_root, fake_tool, build_command="build", **extra):
        config = {
            "tool": sys.executable,
            "build_args": [str(fake_tool), build_command, *ENTRIES],
            **extra,
        }
        # JSON is valid YAML
        (book_root / "bookbuild.yaml").write_text(json.dumps(config), encoding="utf-8")

    @pytest.mark.integration
    def test_successful_build(self, book_root, fake_tool):
        """Test the happy path: exit 0 and progress messages."""
        self.write_config(book_root, fake_tool)

        result = CliRunner().invoke(app, [])

        assert result.exit_code == 0, result.output
        assert "Building start..." in result.output
        assert "Rendering...Done." in result.output
        assert "Building complete." in result.output
        assert (book_root / "intro.md").exists()

    @pytest.mark.integration
    def test_failed_build_exits_nonzero(self, book_root, fake_tool):
        """Test that a failing render exits 1 and names the stage."""
        self.write_config(book_root, fake_tool, build_command="explode")

        result = CliRunner().invoke(app, [])

        assert result.exit_code == 1
        assert "rendering" in result.output

    @pytest.mark.integration
    def test_writes_log_file(self, book_root, fake_tool, tmp_path):
        """Test that a configured log directory receives a per-run log file."""
        self.write_config(book_root, fake_tool, log_dir=str(tmp_path / "logs"))

        result = CliRunner().invoke(app, [])

        assert result.exit_code == 0, result.output
        log_files = list((tmp_path / "logs").glob("build_*/build.log"))
        assert len(log_files) == 1
        assert "[relocate]" in log_files[0].read_text(encoding="utf-8")
