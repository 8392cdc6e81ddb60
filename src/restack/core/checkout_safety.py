"""Checkout-safety protocol: detach every worktree, then put them all back.

git refuses to check out a branch that another worktree holds. Detaching every
worktree at its current commit frees all branch names, so the operating
directory can check out any of them in turn. Restoration runs on every exit
path and never hides the error that ended the run.
"""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from restack.core.errors import CombinedError, RestackError, RestoreError, join_errors
from restack.core.git.abc import Git
from restack.core.inventory import Worktree
from restack.core.user_feedback import UserFeedback

logger = logging.getLogger(__name__)


def detach_worktrees(git: Git, worktrees: Sequence[Worktree]) -> None:
    """Replace every worktree's branch checkout with a detached HEAD at the same commit."""
    for wt in worktrees:
        commit = git.get_head_commit(wt.path)
        logger.debug("Detaching %s at %s (was %s)", wt.path, commit, wt.branch)
        git.checkout_detached(wt.path, commit)


def restore_worktrees(
    git: Git, worktrees: Sequence[Worktree], operating: Worktree
) -> list[RestoreError]:
    """Check every worktree's original branch out again.

    The operating worktree goes first: it is the only one holding a branch
    (whatever was rebased last), which may be another worktree's branch.
    Keeps going after a failure.

    Returns:
        One RestoreError per worktree that could not be restored
    """
    ordered = [operating, *(wt for wt in worktrees if wt != operating)]
    failures: list[RestoreError] = []
    for wt in ordered:
        logger.debug("Restoring %s to %s", wt.path, wt.branch)
        try:
            git.checkout_branch(wt.path, wt.branch)
        except RestackError as e:
            failures.append(RestoreError(wt.path, wt.branch, e))
    return failures


@contextmanager
def restoring_worktrees(
    git: Git,
    worktrees: Sequence[Worktree],
    operating: Worktree,
    feedback: UserFeedback,
) -> Iterator[None]:
    """Run the body, then restore every worktree whatever happened.

    - Body failed, restore fine: the body's error propagates unchanged.
    - Body failed, restore failed: a CombinedError holding both propagates.
    - Body succeeded, restore failed: the restore failure propagates.
    - Interrupts (BaseException) propagate with restore failures as notes.
    """
    try:
        yield
    except Exception as exc:
        feedback.info("Restoring worktrees...")
        failures = restore_worktrees(git, worktrees, operating)
        if not failures:
            raise
        raise CombinedError([exc, *failures]) from exc
    except BaseException as exc:
        for failure in restore_worktrees(git, worktrees, operating):
            exc.add_note(str(failure))
        raise
    else:
        feedback.info("Restoring worktrees...")
        failure = join_errors(*restore_worktrees(git, worktrees, operating))
        if failure is not None:
            raise failure
