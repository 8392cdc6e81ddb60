"""Rebase executor: run the plan, one branch at a time."""

import logging
from pathlib import Path

from restack.core.errors import GitCommandError, RebaseConflictError, RestackError
from restack.core.git.abc import Git
from restack.core.planner import RebasePlan
from restack.core.user_feedback import UserFeedback

logger = logging.getLogger(__name__)


def execute_plan(git: Git, cwd: Path, plan: RebasePlan, feedback: UserFeedback) -> None:
    """Check out and rebase each planned branch onto the target, in order.

    A branch already contained in the target is fast-forwarded, and one already
    based on it is left as is; neither is an error.

    Raises:
        RebaseConflictError: On the first failed rebase, after aborting it.
            The remaining branches are not processed.
    """
    total = len(plan.entries)
    for index, entry in enumerate(plan.entries, start=1):
        feedback.info(f"  {entry.branch} [{index}/{total}]...")
        git.checkout_branch(cwd, entry.branch)
        try:
            git.rebase_update_refs(cwd, plan.target)
        except GitCommandError as e:
            raise _abort_rebase(git, cwd, entry.branch, e) from e


def _abort_rebase(git: Git, cwd: Path, branch: str, cause: GitCommandError) -> RebaseConflictError:
    logger.debug("Rebase of %s failed, aborting", branch)
    try:
        git.rebase_abort(cwd)
    except RestackError as abort_error:
        return RebaseConflictError(branch, cause, abort_error)
    return RebaseConflictError(branch, cause, None)
