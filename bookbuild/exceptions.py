"""Build errors. Every one of them is fatal to the run."""

from pathlib import Path
from typing import List, Optional


class BuildError(Exception):
    """
    Exception raised when any build step fails.

    Attributes:
        message: Error description
        stage: Name of the failing stage (e.g., "relocate", "render")
        path: File involved in the failure, if any
        original_error: The underlying OS or subprocess error, if any
    """

    def __init__(
        self,
        message: str,
        stage: str = "build",
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.stage = stage
        self.path = path
        self.original_error = original_error

        parts = [f"[{stage}] {message}"]

        if path is not None:
            parts.append(f"Path: {path}")

        if original_error is not None:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class ConfigError(BuildError):
    """Raised when the build configuration cannot be loaded or is invalid."""

    def __init__(self, message: str, path: Optional[Path] = None, original_error=None):
        super().__init__(message, stage="config", path=path, original_error=original_error)


class ManifestError(BuildError):
    """Raised when the manifest cannot be opened or read."""

    def __init__(self, message: str, path: Optional[Path] = None, original_error=None):
        super().__init__(message, stage="manifest", path=path, original_error=original_error)


class RelocationError(BuildError):
    """Raised when moving a content file out, back, or into the book directory fails."""


class ExternalCommandError(BuildError):
    """
    Raised when an external command cannot be started or exits unsuccessfully.

    Attributes:
        command: Full argument list that was run
        returncode: Exit status (None if the process never started,
            negative if it was killed by a signal)
    """

    def __init__(
        self,
        message: str,
        stage: str,
        command: List[str],
        returncode: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.command = command
        self.returncode = returncode
        super().__init__(
            f"{message} (command: {' '.join(command)})",
            stage=stage,
            original_error=original_error,
        )
