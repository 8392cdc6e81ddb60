"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

import click

from restack.cli.output import user_output
from restack.core.config import RestackConfig, load_config
from restack.core.git.abc import Git
from restack.core.git.noop import NoopGit
from restack.core.git.real import RealGit
from restack.core.user_feedback import InteractiveFeedback, SuppressedFeedback, UserFeedback


@dataclass(frozen=True)
class RestackContext:
    """Immutable context holding all dependencies for a restack run.

    Created at CLI entry point and threaded through the application. Tests build
    their own with a FakeGit and pass it as click's `obj`.
    """

    git: Git
    feedback: UserFeedback
    config: RestackConfig
    cwd: Path  # Directory the run operates in (where restack was launched)
    dry_run: bool


def safe_cwd() -> tuple[Path | None, str | None]:
    """Get current working directory, detecting if it no longer exists.

    Returns:
        tuple[Path | None, str | None]: (path, error_message)
        - If successful: (Path, None)
        - If directory deleted: (None, error_message)
    """
    try:
        return (Path.cwd(), None)
    except (FileNotFoundError, OSError):
        return (None, "Current working directory no longer exists")


def create_context(*, dry_run: bool, quiet: bool = False) -> RestackContext:
    """Create production context with real implementations.

    Args:
        dry_run: If True, wrap git in NoopGit so nothing is fetched, pulled
                 or rebased
        quiet: If True, use SuppressedFeedback to suppress progress output

    Returns:
        RestackContext with real implementations
    """
    cwd, error_msg = safe_cwd()
    if cwd is None:
        user_output(click.style("Error: ", fg="red") + str(error_msg))
        raise SystemExit(1)

    git: Git = RealGit()
    if dry_run:
        git = NoopGit(git)

    feedback: UserFeedback
    if quiet:
        feedback = SuppressedFeedback()
    else:
        feedback = InteractiveFeedback()

    return RestackContext(
        git=git,
        feedback=feedback,
        config=load_config(),
        cwd=cwd,
        dry_run=dry_run,
    )
