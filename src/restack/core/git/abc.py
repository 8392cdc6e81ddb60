"""High-level git operations interface.

This module provides the narrow capability port the orchestration core talks
to. Nothing outside core/git parses raw git output.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using subprocess
- NoopGit: Dry-run wrapper that skips history-changing operations
- FakeGit (tests/fakes): In-memory repository model
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class WorktreeInfo:
    """Information about a single git worktree.

    branch is None when the worktree has a detached HEAD.
    """

    path: Path
    branch: str | None
    is_prunable: bool = False


@dataclass(frozen=True)
class BranchInfo:
    """A local branch and the commit it points at."""

    name: str
    commit: str


# ============================================================================
# Abstract Interface
# ============================================================================


class Git(ABC):
    """Abstract interface for git operations.

    All implementations (real, no-op and fake) must implement this interface.
    Mutating operations raise GitCommandError on failure; the error carries
    git's diagnostic text and the directory the command ran in.
    """

    @abstractmethod
    def get_version(self) -> tuple[int, int, int]:
        """Return the installed git version as (major, minor, patch).

        Raises:
            GitOutputParseError: If `git --version` output is unrecognised
        """
        ...

    @abstractmethod
    def is_inside_work_tree(self, cwd: Path) -> bool:
        """Check whether cwd is inside a git work tree."""
        ...

    @abstractmethod
    def list_worktrees(self, cwd: Path) -> list[WorktreeInfo]:
        """List all worktrees of the repository containing cwd.

        The main worktree comes first. Bare entries are omitted.

        Raises:
            GitOutputParseError: If the listing is malformed
        """
        ...

    @abstractmethod
    def list_branches(self, cwd: Path) -> list[BranchInfo]:
        """List all local branches with the commit each points at.

        Raises:
            GitOutputParseError: If the listing is malformed
        """
        ...

    @abstractmethod
    def list_branches_containing(self, cwd: Path, ref: str) -> list[str]:
        """List local branches whose history contains ref.

        A branch always contains its own commit, so the result includes ref's
        own branch (and any branch at the same commit) when ref is a branch.
        """
        ...

    @abstractmethod
    def has_uncommitted_changes(self, cwd: Path) -> bool:
        """Check if a worktree has staged, modified or untracked files."""
        ...

    @abstractmethod
    def checkout_branch(self, cwd: Path, branch: str) -> None:
        """Checkout a branch in the given directory.

        Fails if the branch is checked out in another worktree.
        """
        ...

    @abstractmethod
    def checkout_detached(self, cwd: Path, ref: str) -> None:
        """Checkout a detached HEAD at the given ref (commit SHA, branch, etc)."""
        ...

    @abstractmethod
    def fetch_and_prune(self, cwd: Path) -> None:
        """Fetch from the default remote, pruning deleted remote branches."""
        ...

    @abstractmethod
    def pull(self, cwd: Path, *, ff_only: bool) -> None:
        """Pull the checked-out branch from its upstream.

        Args:
            cwd: Working directory
            ff_only: If True, use --ff-only to prevent merge commits
        """
        ...

    @abstractmethod
    def rebase_update_refs(self, cwd: Path, onto: str) -> None:
        """Rebase the checked-out branch onto `onto` with --update-refs.

        Branch pointers inside the rewritten range move along with it. A branch
        that is already contained in `onto` is fast-forwarded; one already based
        on `onto` is left unchanged. On failure the rebase is left in progress.
        """
        ...

    @abstractmethod
    def rebase_abort(self, cwd: Path) -> None:
        """Abort an in-progress rebase, restoring the branch to its prior state."""
        ...

    @abstractmethod
    def get_head_commit(self, cwd: Path) -> str:
        """Return the commit SHA HEAD points at in cwd."""
        ...
