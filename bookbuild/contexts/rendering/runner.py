"""
External Command Runner

Runs the documentation tool's sub-commands (test, build) as blocking child
processes. There is no timeout and no retry: a hung tool hangs the build.
"""

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List

from bookbuild.contexts.rendering.logger import log_command_result, log_command_start
from bookbuild.exceptions import ExternalCommandError


@dataclass
class CommandResult:
    """
    Result of one external command.

    Attributes:
        command: Full argument list that was run
        returncode: Exit status
        elapsed_time: Wall-clock seconds spent waiting for the process
        stdout: Captured standard output (empty unless capture_output was set)
        stderr: Captured standard error (empty unless capture_output was set)
    """

    command: List[str]
    returncode: int
    elapsed_time: float
    stdout: str = ""
    stderr: str = ""


def run_external(
    command: str,
    args: List[str],
    cwd: Path,
    stage: str,
    capture_output: bool = False,
) -> CommandResult:
    """
    Run an external command and wait for it to exit.

    Args:
        command: Executable name or path (e.g., "mdbook")
        args: Fixed argument list (e.g., ["build"])
        cwd: Working directory for the child process
        stage: Stage name used in log and error messages
        capture_output: Capture stdout/stderr instead of inheriting the
            parent's streams

    Returns:
        CommandResult for a zero exit status

    Raises:
        ExternalCommandError: If the process cannot be started, exits
            nonzero, or is killed by a signal
    """
    cmd = [command, *args]
    log_command_start(stage, cmd, cwd)

    start_time = time.time()
    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=capture_output,
            text=True if capture_output else None,
            encoding="utf-8" if capture_output else None,
            errors="replace" if capture_output else None,
        )
    except OSError as e:
        raise ExternalCommandError(
            f"Failed to start the {stage} process", stage=stage, command=cmd, original_error=e
        ) from e

    result = CommandResult(
        command=cmd,
        returncode=completed.returncode,
        elapsed_time=time.time() - start_time,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
    log_command_result(stage, result)

    if result.returncode != 0:
        raise ExternalCommandError(
            _describe_exit(stage, result.returncode),
            stage=stage,
            command=cmd,
            returncode=result.returncode,
        )

    return result


def _describe_exit(stage: str, returncode: int) -> str:
    # subprocess reports death by signal N as returncode -N
    if returncode < 0:
        return f"The {stage} process was terminated by signal {-returncode}"
    return f"The {stage} process exited with code {returncode}"
