"""No-op Git wrapper for dry-run mode.

This module provides a Git wrapper that prevents execution of operations that
change history or talk to the remote, while delegating read-only operations to
the wrapped implementation.
"""

from pathlib import Path

import click

from restack.cli.output import user_output
from restack.core.git.abc import BranchInfo, Git, WorktreeInfo

# ============================================================================
# No-op Wrapper
# ============================================================================


class NoopGit(Git):
    """No-op wrapper that prints history-changing operations instead of running them.

    Checkouts are delegated: detaching and restoring worktrees only moves HEAD
    between identical commits, so a dry run still exercises the checkout-safety
    protocol against the real repository.

    Usage:
        real_ops = RealGit()
        noop_ops = NoopGit(real_ops)

        # Prints "[DRY RUN] Would run: git rebase --update-refs main"
        noop_ops.rebase_update_refs(cwd, "main")
    """

    def __init__(self, wrapped: Git) -> None:
        """Create a dry-run wrapper around a Git implementation.

        Args:
            wrapped: The Git implementation to wrap (usually RealGit or FakeGit)
        """
        self._wrapped = wrapped

    # Read-only operations: delegate to wrapped implementation

    def get_version(self) -> tuple[int, int, int]:
        """Get git version (read-only, delegates to wrapped)."""
        return self._wrapped.get_version()

    def is_inside_work_tree(self, cwd: Path) -> bool:
        """Check work tree (read-only, delegates to wrapped)."""
        return self._wrapped.is_inside_work_tree(cwd)

    def list_worktrees(self, cwd: Path) -> list[WorktreeInfo]:
        """List all worktrees (read-only, delegates to wrapped)."""
        return self._wrapped.list_worktrees(cwd)

    def list_branches(self, cwd: Path) -> list[BranchInfo]:
        """List local branches (read-only, delegates to wrapped)."""
        return self._wrapped.list_branches(cwd)

    def list_branches_containing(self, cwd: Path, ref: str) -> list[str]:
        """List containing branches (read-only, delegates to wrapped)."""
        return self._wrapped.list_branches_containing(cwd, ref)

    def has_uncommitted_changes(self, cwd: Path) -> bool:
        """Check for uncommitted changes (read-only, delegates to wrapped)."""
        return self._wrapped.has_uncommitted_changes(cwd)

    def get_head_commit(self, cwd: Path) -> str:
        """Resolve HEAD (read-only, delegates to wrapped)."""
        return self._wrapped.get_head_commit(cwd)

    def checkout_branch(self, cwd: Path, branch: str) -> None:
        """Checkout branch (delegates to wrapped - considered read-only for dry-run)."""
        self._wrapped.checkout_branch(cwd, branch)

    def checkout_detached(self, cwd: Path, ref: str) -> None:
        """Checkout detached HEAD (delegates to wrapped - considered read-only for dry-run)."""
        self._wrapped.checkout_detached(cwd, ref)

    # Operations that change history or remote-tracking state: print instead

    def fetch_and_prune(self, cwd: Path) -> None:
        """Print what would be fetched without fetching."""
        _print_dry_run("git fetch --prune")

    def pull(self, cwd: Path, *, ff_only: bool) -> None:
        """Print what would be pulled without pulling."""
        _print_dry_run("git pull --ff-only" if ff_only else "git pull")

    def rebase_update_refs(self, cwd: Path, onto: str) -> None:
        """Print the rebase without running it."""
        _print_dry_run(f"git rebase --update-refs {onto}")

    def rebase_abort(self, cwd: Path) -> None:
        """Nothing to abort in dry-run mode."""
        _print_dry_run("git rebase --abort")


def _print_dry_run(command: str) -> None:
    user_output(click.style("[DRY RUN] ", fg="yellow") + f"Would run: {command}")
