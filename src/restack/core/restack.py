"""Restack orchestration.

Phases run strictly in this order, each a blocking call sequence against the
git port:

1. Pre-flight: git version, repository check, inventory, clean worktrees
2. Detach every worktree
3. Update the target branch
4. Plan (needs the target's refreshed commit)
5. Execute the plan
6. Restore every worktree (always, merged with any error in flight)

Pre-flight mutates nothing, so their failures skip restoration.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path

from restack.core.branch_graph import BranchGraph
from restack.core.checkout_safety import detach_worktrees, restoring_worktrees
from restack.core.context import RestackContext
from restack.core.executor import execute_plan
from restack.core.inventory import Inventory, build_inventory
from restack.core.planner import RebasePlan, compute_rebase_plan
from restack.core.preflight import (
    check_git_version,
    check_inside_repository,
    ensure_worktrees_clean,
)
from restack.core.target import update_target

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunState:
    """State threaded through the phases of one run.

    Phases receive the fields they read and return updated copies of the
    fields they own; nothing here is shared globally.
    """

    cwd: Path
    inventory: Inventory
    plan: RebasePlan | None = None


@dataclass(frozen=True)
class RestackResult:
    """Outcome of a successful run."""

    target: str
    target_commit: str
    plan: RebasePlan


def run_restack(
    ctx: RestackContext,
    *,
    requested_target: str | None,
    on_plan: Callable[[RebasePlan], None] | None = None,
) -> RestackResult:
    """Rebase every local branch onto the target, preserving branch ordering.

    Args:
        ctx: Application context
        requested_target: Explicit target branch, or None for main/master
        on_plan: Called with the plan before it is executed

    Returns:
        RestackResult describing what was rebased

    Raises:
        RestackError: Any failure; once worktrees have been detached the error
            also carries every restoration failure
    """
    check_git_version(ctx.git)
    check_inside_repository(ctx.git, ctx.cwd)
    inventory = build_inventory(ctx.git, ctx.cwd, requested_target=requested_target)
    ensure_worktrees_clean(ctx.git, inventory.worktrees)

    state = RunState(cwd=ctx.cwd, inventory=inventory)

    with restoring_worktrees(
        ctx.git, inventory.worktrees, inventory.operating_worktree, ctx.feedback
    ):
        ctx.feedback.info(f"Detaching {len(inventory.worktrees)} worktree(s)...")
        detach_worktrees(ctx.git, state.inventory.worktrees)

        if ctx.config.fetch:
            ctx.feedback.info(f"Fetching, pruning, and updating '{inventory.target}'...")
        else:
            ctx.feedback.info(f"Updating '{inventory.target}'...")
        state = replace(
            state,
            inventory=update_target(ctx.git, state.cwd, state.inventory, fetch=ctx.config.fetch),
        )

        graph = BranchGraph(ctx.git, state.cwd, state.inventory.branches)
        plan = compute_rebase_plan(graph, state.inventory.branches, state.inventory.target)
        state = replace(state, plan=plan)
        if on_plan is not None:
            on_plan(plan)

        ctx.feedback.info(f"Rebasing {len(plan.entries)} branch(es) onto '{plan.target}'...")
        execute_plan(ctx.git, state.cwd, plan, ctx.feedback)

    logger.debug("Run finished: %s", state)
    return RestackResult(
        target=state.inventory.target,
        target_commit=state.inventory.target_commit,
        plan=plan,
    )
