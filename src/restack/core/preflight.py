"""Pre-flight checks run before any worktree is touched.

Failures here need no restoration: nothing has been mutated yet.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from restack.core.errors import (
    DirtyWorktreeError,
    GitOutputParseError,
    NotARepositoryError,
    ToolVersionError,
)
from restack.core.git.abc import Git
from restack.core.inventory import Worktree

logger = logging.getLogger(__name__)

# First release with `git rebase --update-refs`
MINIMUM_GIT_VERSION = (2, 38, 0)


def format_version(version: tuple[int, int, int]) -> str:
    return ".".join(str(part) for part in version)


def check_git_version(git: Git) -> None:
    """Refuse to run on a git without ref-updating rebase support.

    Raises:
        ToolVersionError: If git is older than MINIMUM_GIT_VERSION or its
            version cannot be determined
    """
    required = format_version(MINIMUM_GIT_VERSION)
    try:
        version = git.get_version()
    except GitOutputParseError as e:
        raise ToolVersionError(found=f"unknown ({e.detail})", required=required) from e

    logger.debug("git version %s (need %s)", format_version(version), required)
    if version < MINIMUM_GIT_VERSION:
        raise ToolVersionError(found=format_version(version), required=required)


def check_inside_repository(git: Git, cwd: Path) -> None:
    """Raise NotARepositoryError unless cwd is inside a git work tree."""
    if not git.is_inside_work_tree(cwd):
        raise NotARepositoryError(cwd)


def ensure_worktrees_clean(git: Git, worktrees: Sequence[Worktree]) -> None:
    """Reject the run if any worktree has uncommitted changes.

    Every worktree is checked so the error lists all of them at once.

    Raises:
        DirtyWorktreeError: If at least one worktree is dirty
    """
    dirty = [wt.path for wt in worktrees if git.has_uncommitted_changes(wt.path)]
    logger.debug("Dirty worktrees: %s", dirty)
    if dirty:
        raise DirtyWorktreeError(dirty)
