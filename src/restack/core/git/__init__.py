"""Git operations subpackage.

This subpackage provides abstractions over git operations with support for
testing via fakes and dry-run via wrappers.
"""

from restack.core.git.abc import BranchInfo, Git, WorktreeInfo
from restack.core.git.noop import NoopGit
from restack.core.git.real import RealGit

__all__ = [
    "Git",
    "WorktreeInfo",
    "BranchInfo",
    "RealGit",
    "NoopGit",
]
