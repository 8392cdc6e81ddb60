"""Branch dependency graph.

`b` is a descendant of `a` when b's history contains a's commit and b points at
a different commit. Branches at the identical commit are aliases, not
dependents, so they never need a rebase of their own on account of each other.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

from restack.core.errors import GraphConsistencyError
from restack.core.git.abc import Git

logger = logging.getLogger(__name__)


class BranchGraph:
    """Descendant relation over a snapshot of branch commits.

    Edges are computed on demand from the git port and memoised per branch.
    """

    def __init__(self, git: Git, cwd: Path, branches: Mapping[str, str]) -> None:
        self._git = git
        self._cwd = cwd
        self._branches = branches
        self._cache: dict[str, frozenset[str]] = {}

    def descendants(self, branch: str) -> frozenset[str]:
        """Return the known branches built on top of `branch`.

        Raises:
            GraphConsistencyError: If `branch`, or a branch git reports as
                containing it, is missing from the snapshot
        """
        if branch in self._cache:
            return self._cache[branch]

        commit = self._branches.get(branch)
        if commit is None:
            raise GraphConsistencyError(branch, "queried for descendants")

        result: set[str] = set()
        for name in self._git.list_branches_containing(self._cwd, commit):
            if name == branch:
                continue
            other_commit = self._branches.get(name)
            if other_commit is None:
                raise GraphConsistencyError(name, f"(reported as containing '{branch}')")
            if other_commit == commit:
                continue
            result.add(name)

        descendants = frozenset(result)
        logger.debug("descendants(%s) = %s", branch, sorted(descendants))
        self._cache[branch] = descendants
        return descendants
