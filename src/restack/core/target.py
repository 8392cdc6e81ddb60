"""Target updater: bring the integration branch up to date."""

import logging
from pathlib import Path

from restack.core.git.abc import Git
from restack.core.inventory import Inventory

logger = logging.getLogger(__name__)


def update_target(git: Git, cwd: Path, inventory: Inventory, *, fetch: bool) -> Inventory:
    """Check out and fast-forward the target in the operating directory.

    Every later rebase is based on the target, so any failure here propagates
    and stops the run.

    Returns:
        Inventory with the target's commit refreshed
    """
    if fetch:
        git.fetch_and_prune(cwd)
    git.checkout_branch(cwd, inventory.target)
    git.pull(cwd, ff_only=True)

    commit = git.get_head_commit(cwd)
    logger.debug("Target %s: %s -> %s", inventory.target, inventory.target_commit, commit)
    return inventory.with_branch_commit(inventory.target, commit)
