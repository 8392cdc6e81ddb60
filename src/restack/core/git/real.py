"""Production Git implementation using subprocess.

This module provides the real Git implementation that executes actual git
commands via subprocess.
"""

import subprocess
from pathlib import Path

from restack.core.git.abc import BranchInfo, Git, WorktreeInfo
from restack.core.git.parsing import (
    parse_branch_listing,
    parse_branch_refs,
    parse_git_version,
    parse_worktree_porcelain,
)
from restack.core.subprocess import run_subprocess_with_context

# ============================================================================
# Production Implementation
# ============================================================================


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def get_version(self) -> tuple[int, int, int]:
        """Return the installed git version."""
        result = run_subprocess_with_context(
            ["git", "--version"],
            operation_context="query git version",
        )
        return parse_git_version(result.stdout)

    def is_inside_work_tree(self, cwd: Path) -> bool:
        """Check whether cwd is inside a git work tree."""
        result = subprocess.run(
            ["git", "rev-parse", "--is-inside-work-tree"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        return result.returncode == 0 and result.stdout.strip() == "true"

    def list_worktrees(self, cwd: Path) -> list[WorktreeInfo]:
        """List all worktrees in the repository."""
        result = run_subprocess_with_context(
            ["git", "worktree", "list", "--porcelain"],
            operation_context="list worktrees",
            cwd=cwd,
        )
        return parse_worktree_porcelain(result.stdout)

    def list_branches(self, cwd: Path) -> list[BranchInfo]:
        """List all local branches with their commits."""
        result = run_subprocess_with_context(
            ["git", "for-each-ref", "--format=%(refname)%00%(objectname)", "refs/heads/"],
            operation_context="list local branches",
            cwd=cwd,
        )
        return parse_branch_listing(result.stdout)

    def list_branches_containing(self, cwd: Path, ref: str) -> list[str]:
        """List local branches whose history contains ref."""
        result = run_subprocess_with_context(
            ["git", "for-each-ref", "--contains", ref, "--format=%(refname)", "refs/heads/"],
            operation_context=f"list branches containing '{ref}'",
            cwd=cwd,
        )
        return parse_branch_refs(result.stdout)

    def has_uncommitted_changes(self, cwd: Path) -> bool:
        """Check if a worktree has uncommitted changes."""
        result = run_subprocess_with_context(
            ["git", "status", "--porcelain"],
            operation_context="check worktree status",
            cwd=cwd,
        )
        return bool(result.stdout.strip())

    def checkout_branch(self, cwd: Path, branch: str) -> None:
        """Checkout a branch in the given directory."""
        run_subprocess_with_context(
            ["git", "checkout", branch],
            operation_context=f"checkout branch '{branch}'",
            cwd=cwd,
        )

    def checkout_detached(self, cwd: Path, ref: str) -> None:
        """Checkout a detached HEAD at the given ref."""
        run_subprocess_with_context(
            ["git", "checkout", "--detach", ref],
            operation_context=f"checkout detached HEAD at '{ref}'",
            cwd=cwd,
        )

    def fetch_and_prune(self, cwd: Path) -> None:
        """Fetch from the default remote, pruning deleted remote branches."""
        run_subprocess_with_context(
            ["git", "fetch", "--prune"],
            operation_context="fetch and prune",
            cwd=cwd,
        )

    def pull(self, cwd: Path, *, ff_only: bool) -> None:
        """Pull the checked-out branch from its upstream."""
        cmd = ["git", "pull"]
        if ff_only:
            cmd.append("--ff-only")
        run_subprocess_with_context(cmd, operation_context="pull", cwd=cwd)

    def rebase_update_refs(self, cwd: Path, onto: str) -> None:
        """Rebase the checked-out branch onto `onto`, moving refs along."""
        run_subprocess_with_context(
            ["git", "rebase", "--update-refs", onto],
            operation_context=f"rebase onto '{onto}'",
            cwd=cwd,
        )

    def rebase_abort(self, cwd: Path) -> None:
        """Abort an in-progress rebase."""
        run_subprocess_with_context(
            ["git", "rebase", "--abort"],
            operation_context="abort rebase",
            cwd=cwd,
        )

    def get_head_commit(self, cwd: Path) -> str:
        """Return the commit SHA HEAD points at."""
        result = run_subprocess_with_context(
            ["git", "rev-parse", "HEAD"],
            operation_context="resolve HEAD",
            cwd=cwd,
        )
        return result.stdout.strip()
