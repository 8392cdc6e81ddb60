"""Subprocess execution with rich error context.

All git invocations made by RealGit go through run_subprocess_with_context so a
failure always surfaces as a GitCommandError naming the operation, the directory
and git's own diagnostic text.
"""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from restack.core.errors import GitCommandError

logger = logging.getLogger(__name__)


def run_subprocess_with_context(
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute a subprocess, converting failures into GitCommandError.

    Args:
        cmd: Command and arguments to execute
        operation_context: Human-readable description of the operation
            (e.g. "checkout branch 'feature'")
        cwd: Working directory for command execution
        check: Whether to raise on non-zero exit (default: True)

    Returns:
        CompletedProcess with decoded stdout/stderr

    Raises:
        GitCommandError: If the command fails or its binary is not found
    """
    logger.debug("Running %s in %s", " ".join(cmd), cwd)
    try:
        return subprocess.run(
            list(cmd),
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=check,
        )
    except subprocess.CalledProcessError as e:
        raise GitCommandError(
            operation_context,
            cwd=cwd,
            command=cmd,
            returncode=e.returncode,
            output=_combine_output(e.stdout, e.stderr),
        ) from e
    except FileNotFoundError as e:
        raise GitCommandError(
            operation_context,
            cwd=cwd,
            command=cmd,
            returncode=None,
            output=f"Command not found: {cmd[0]}",
        ) from e


def _combine_output(stdout: str | None, stderr: str | None) -> str:
    parts = []
    if stdout and stdout.strip():
        parts.append(f"stdout: {stdout.strip()}")
    if stderr and stderr.strip():
        parts.append(f"stderr: {stderr.strip()}")
    return "\n".join(parts)
