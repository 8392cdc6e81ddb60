"""Rebase planning.

Rebases run with --update-refs, so rewriting the history under a leaf moves
every other branch pointer inside the rewritten range along with it. Only two
kinds of branch therefore need an explicit rebase:

- leaves: branches nothing else is built on (the tips of dependency chains)
- behind branches: non-leaves that the target already contains but that
  point at a different commit than the target (e.g. partially merged work)

Interior branches ride along with their leaf. That only works when the interior
branch has a single leaf above it; a branch that forks into several leaves is
rejected rather than silently duplicated under each of them.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

from restack.core.branch_graph import BranchGraph
from restack.core.errors import BranchTopologyError, GraphConsistencyError

logger = logging.getLogger(__name__)

PlanReason = Literal["leaf", "behind"]


@dataclass(frozen=True)
class PlannedRebase:
    """One explicit rebase and why it is needed."""

    branch: str
    reason: PlanReason


@dataclass(frozen=True)
class RebasePlan:
    """Branches to rebase onto the target, sorted by name. Never contains the target."""

    target: str
    entries: tuple[PlannedRebase, ...]

    @property
    def branches(self) -> tuple[str, ...]:
        return tuple(entry.branch for entry in self.entries)


def compute_rebase_plan(
    graph: BranchGraph, branches: Mapping[str, str], target: str
) -> RebasePlan:
    """Compute the minimal set of branches needing an explicit rebase.

    Args:
        graph: Descendant relation over the same snapshot as `branches`
        branches: Branch name -> commit id, with the target's commit refreshed
        target: Integration branch

    Returns:
        RebasePlan with entries sorted by branch name

    Raises:
        GraphConsistencyError: If the target is missing from the snapshot
        BranchTopologyError: If an interior branch has several leaves above it
    """
    if target not in branches:
        raise GraphConsistencyError(target, "(the target)")
    target_commit = branches[target]

    candidates = sorted(name for name in branches if name != target)
    descendants = {name: graph.descendants(name) for name in candidates}

    entries: list[PlannedRebase] = []
    for name in candidates:
        if not descendants[name]:
            entries.append(PlannedRebase(branch=name, reason="leaf"))
        elif target in descendants[name] and branches[name] != target_commit:
            entries.append(PlannedRebase(branch=name, reason="behind"))

    _validate_single_leaf_chains(descendants, entries, branches, target)

    logger.debug("Rebase plan onto %s: %s", target, [(e.branch, e.reason) for e in entries])
    return RebasePlan(target=target, entries=tuple(entries))


def _validate_single_leaf_chains(
    descendants: Mapping[str, frozenset[str]],
    entries: list[PlannedRebase],
    branches: Mapping[str, str],
    target: str,
) -> None:
    leaves = {entry.branch for entry in entries if entry.reason == "leaf"}
    planned = {entry.branch for entry in entries}

    forks: dict[str, tuple[str, ...]] = {}
    for name, below in descendants.items():
        if name in planned:
            continue
        # Contained in the target: outside every target..leaf range, never rewritten
        if branches[name] == branches[target] or target in below:
            continue
        leaves_above = sorted(below & leaves)
        if len(leaves_above) > 1:
            forks[name] = tuple(leaves_above)

    if forks:
        raise BranchTopologyError(forks)
