"""
Build configuration.

Settings come from three layers, later ones winning:
    1. BuildConfig defaults (mdbook, testing disabled, src/SUMMARY.md manifest)
    2. bookbuild.yaml in the project root (or the file named by BOOKBUILD_CONFIG)
    3. Environment variables, including those loaded from <root>/.env

Example bookbuild.yaml:
    tool: mdbook
    run_tests: true
    collect_html: true
    book_dir: book
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from bookbuild.exceptions import ConfigError

DEFAULT_CONFIG_FILENAME = "bookbuild.yaml"

# Environment variable -> BuildConfig field
ENV_OVERRIDES = {
    "BOOK_TOOL": "tool",
    "BOOK_RUN_TESTS": "run_tests",
    "BOOK_COLLECT_HTML": "collect_html",
    "BOOK_CAPTURE_OUTPUT": "capture_output",
    "BOOKBUILD_LOGS_PATH": "log_dir",
}

BOOL_FIELDS = {"run_tests", "collect_html", "capture_output"}
LIST_FIELDS = {"test_args", "build_args"}
OPTIONAL_FIELDS = {"log_dir"}


@dataclass
class BuildConfig:
    """
    Settings for one build run.

    Attributes:
        tool: External documentation tool to invoke
        test_args: Arguments for the test invocation
        build_args: Arguments for the render invocation
        run_tests: Run the test stage before relocating
        manifest: Manifest location, relative to the project root
        content_dir: Directory holding the content files, relative to the project root
        nested_dir: Subdirectory of content_dir the renderer reads from
        collect_html: Move stray .html files into book_dir after rendering
        book_dir: Renderer output directory name (a single path component)
        log_dir: Directory for per-run log files (None for console only)
        capture_output: Capture tool output into the debug log instead of
            passing it through to the console
    """

    tool: str = "mdbook"
    test_args: List[str] = field(default_factory=lambda: ["test"])
    build_args: List[str] = field(default_factory=lambda: ["build"])
    run_tests: bool = False
    manifest: str = "src/SUMMARY.md"
    content_dir: str = "."
    nested_dir: str = "src"
    collect_html: bool = False
    book_dir: str = "book"
    log_dir: Optional[str] = None
    capture_output: bool = False


def _validate_overrides(overrides: Dict[str, Any], source: Path) -> None:
    known = {f.name for f in fields(BuildConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}", path=source)

    for key, value in overrides.items():
        if key in OPTIONAL_FIELDS and value is None:
            continue
        if key in BOOL_FIELDS:
            ok = isinstance(value, bool)
        elif key in LIST_FIELDS:
            ok = isinstance(value, list) and all(isinstance(v, str) for v in value)
        else:
            ok = isinstance(value, str)
        if not ok:
            raise ConfigError(f"Invalid value for '{key}': {value!r}", path=source)


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Load a YAML config file into a plain dict of overrides.

    Args:
        config_path: Path to the YAML file

    Returns:
        Dict of validated BuildConfig overrides (empty for an empty file)

    Raises:
        ConfigError: If the file cannot be parsed or holds unknown/invalid keys
    """
    try:
        loaded = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    except Exception as e:
        raise ConfigError("Failed to load config file", path=config_path, original_error=e) from e

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError("Config file must contain a mapping", path=config_path)

    _validate_overrides(loaded, config_path)
    return loaded


def _is_single_name(name: str) -> bool:
    if name in ("", ".", "..") or "\\" in name:
        return False
    return Path(name).name == name


def _env_overrides() -> Dict[str, Any]:
    overrides = {}
    for env_name, key in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is None or value == "":
            continue
        if key in BOOL_FIELDS:
            overrides[key] = value.lower() == "true"
        else:
            overrides[key] = value
    return overrides


def load_build_config(root: Path, config_path: Optional[Path] = None) -> BuildConfig:
    """
    Resolve the build configuration for a project root.

    Args:
        root: Project root directory
        config_path: Explicit config file (defaults to BOOKBUILD_CONFIG env
            variable, then to bookbuild.yaml in root if it exists)

    Returns:
        BuildConfig with file and environment overrides applied

    Raises:
        ConfigError: If an explicitly named config file does not exist,
            any config file is invalid, or book_dir is not a single
            directory name
    """
    load_dotenv(root / ".env")

    if config_path is None and os.getenv("BOOKBUILD_CONFIG"):
        config_path = Path(os.getenv("BOOKBUILD_CONFIG"))

    if config_path is not None:
        if not config_path.is_absolute():
            config_path = root / config_path
        if not config_path.is_file():
            raise ConfigError("Config file not found", path=config_path)
    elif (root / DEFAULT_CONFIG_FILENAME).is_file():
        config_path = root / DEFAULT_CONFIG_FILENAME

    overrides = load_config_file(config_path) if config_path is not None else {}
    overrides.update(_env_overrides())

    config = BuildConfig(**overrides)

    # HTML collection matches book_dir against single directory names
    if not _is_single_name(config.book_dir):
        raise ConfigError(
            f"book_dir must be a single directory name, got {config.book_dir!r}", path=config_path
        )

    return config
