"""Initial snapshot of worktrees, branches and the target branch.

The inventory is read-only: building it runs listing commands only. It is taken
once per run; afterwards only the target's commit is ever refreshed (by the
target updater, through with_branch_commit).
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path

from restack.core.errors import DiscoveryError
from restack.core.git.abc import Git, WorktreeInfo

logger = logging.getLogger(__name__)

DEFAULT_TARGET_CANDIDATES = ("main", "master")


@dataclass(frozen=True)
class Worktree:
    """A worktree and the branch it had checked out when the run started."""

    path: Path
    branch: str


@dataclass(frozen=True)
class Inventory:
    """Snapshot of the repository taken at the start of a run.

    Attributes:
        worktrees: Every worktree, main worktree first
        operating_worktree: The worktree containing the directory restack runs in
        branches: Local branch name -> commit id
        target: Integration branch everything is rebased onto
    """

    worktrees: tuple[Worktree, ...]
    operating_worktree: Worktree
    branches: Mapping[str, str]
    target: str

    @property
    def target_commit(self) -> str:
        return self.branches[self.target]

    def with_branch_commit(self, branch: str, commit: str) -> "Inventory":
        """Return a copy with one branch's commit replaced."""
        return replace(self, branches={**self.branches, branch: commit})


def build_inventory(git: Git, cwd: Path, *, requested_target: str | None) -> Inventory:
    """Discover worktrees, branches and the target branch.

    Args:
        git: Git capability port
        cwd: Directory restack operates in
        requested_target: Explicitly requested target branch, if any

    Returns:
        Inventory snapshot

    Raises:
        DiscoveryError: If a listing is malformed, a worktree cannot be restored
            later, cwd is outside every worktree, or no target can be resolved
    """
    worktrees = tuple(_to_worktree(info) for info in git.list_worktrees(cwd))
    if not worktrees:
        raise DiscoveryError("git reported no worktrees")

    branches: dict[str, str] = {}
    for branch in git.list_branches(cwd):
        if branch.name in branches:
            raise DiscoveryError(f"Branch '{branch.name}' listed more than once")
        branches[branch.name] = branch.commit

    for wt in worktrees:
        if wt.branch not in branches:
            raise DiscoveryError(
                f"Worktree {wt.path} is on '{wt.branch}', which is not a local branch"
            )

    target = resolve_target(branches, requested_target)
    operating = find_operating_worktree(worktrees, cwd)

    logger.debug(
        "Inventory: %d worktree(s), %d branch(es), target=%s, operating=%s",
        len(worktrees),
        len(branches),
        target,
        operating.path,
    )
    return Inventory(
        worktrees=worktrees,
        operating_worktree=operating,
        branches=branches,
        target=target,
    )


def resolve_target(branches: Mapping[str, str], requested: str | None) -> str:
    """Pick the integration branch.

    An explicitly requested branch must exist. Otherwise "main" is preferred,
    then "master".

    Raises:
        DiscoveryError: If the requested branch is missing or no default exists
    """
    if requested is not None:
        if requested not in branches:
            raise DiscoveryError(f"Target branch '{requested}' does not exist")
        return requested

    for candidate in DEFAULT_TARGET_CANDIDATES:
        if candidate in branches:
            return candidate

    raise DiscoveryError(
        "Could not find 'main' or 'master' branch; pass --target to choose one"
    )


def find_operating_worktree(worktrees: Sequence[Worktree], cwd: Path) -> Worktree:
    """Return the worktree containing cwd (the deepest one if worktrees nest).

    Raises:
        DiscoveryError: If cwd is not inside any worktree
    """
    containing = [wt for wt in worktrees if wt.path == cwd or wt.path in cwd.parents]
    if not containing:
        listing = ", ".join(str(wt.path) for wt in worktrees)
        raise DiscoveryError(
            f"Unable to find the current directory ({cwd}) amongst the worktrees ({listing})"
        )
    return max(containing, key=lambda wt: len(wt.path.parts))


def _to_worktree(info: WorktreeInfo) -> Worktree:
    if info.is_prunable:
        raise DiscoveryError(
            f"Worktree {info.path} no longer exists; run `git worktree prune` first"
        )
    if info.branch is None:
        raise DiscoveryError(
            f"Worktree {info.path} has a detached HEAD; check out a branch there first"
        )
    return Worktree(path=info.path, branch=info.branch)
