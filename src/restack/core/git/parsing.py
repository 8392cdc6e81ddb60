"""Parsers for the git output RealGit consumes.

Each parser accepts the raw text of exactly one git command and raises
GitOutputParseError when the text does not have the documented shape.
"""

import re
from pathlib import Path

from restack.core.errors import GitOutputParseError
from restack.core.git.abc import BranchInfo, WorktreeInfo

BRANCH_REF_PREFIX = "refs/heads/"
FIELD_SEPARATOR = "\x00"

_VERSION_PATTERN = re.compile(r"^git version (\d+)\.(\d+)(?:\.(\d+))?")


def parse_worktree_porcelain(output: str) -> list[WorktreeInfo]:
    """Parse `git worktree list --porcelain`.

    Records are separated by blank lines. Each starts with `worktree <path>`
    and holds either `bare`, or `HEAD <sha>` followed by `branch <ref>` or
    `detached`. Optional `locked`/`prunable` lines may follow.

    Bare entries have no checkout and are skipped.
    """
    worktrees: list[WorktreeInfo] = []
    blocks = [block for block in output.split("\n\n") if block.strip()]

    for index, block in enumerate(blocks):
        lines = [line.rstrip("\r") for line in block.splitlines() if line.strip()]
        keyword, _, path = lines[0].partition(" ")
        if keyword != "worktree" or not path:
            raise GitOutputParseError(
                "worktree listing",
                f'expected "worktree <dir>" to open record {index}; found "{lines[0]}"',
            )

        attributes: dict[str, str] = {}
        for line in lines[1:]:
            key, _, value = line.partition(" ")
            attributes[key] = value

        if "bare" in attributes:
            continue

        if "HEAD" not in attributes:
            raise GitOutputParseError(
                "worktree listing", f"record for {path} has no HEAD line"
            )

        branch: str | None = None
        if "branch" in attributes:
            branch_ref = attributes["branch"]
            if not branch_ref.startswith(BRANCH_REF_PREFIX) or branch_ref == BRANCH_REF_PREFIX:
                raise GitOutputParseError(
                    "worktree listing",
                    f'expected a branch ref like "refs/heads/main" for {path}; '
                    f'found "{branch_ref}"',
                )
            branch = branch_ref.removeprefix(BRANCH_REF_PREFIX)
        elif "detached" not in attributes:
            raise GitOutputParseError(
                "worktree listing", f"record for {path} is neither on a branch nor detached"
            )

        worktrees.append(
            WorktreeInfo(
                path=Path(path),
                branch=branch,
                is_prunable="prunable" in attributes,
            )
        )

    return worktrees


def parse_branch_listing(output: str) -> list[BranchInfo]:
    """Parse `git for-each-ref --format=%(refname)%00%(objectname) refs/heads/`."""
    branches: list[BranchInfo] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        fields = line.split(FIELD_SEPARATOR)
        if len(fields) != 2:
            raise GitOutputParseError(
                "branch listing", f"expected 2 fields per line; found {len(fields)} in {line!r}"
            )
        ref, commit = fields[0].strip(), fields[1].strip()
        if not commit:
            raise GitOutputParseError("branch listing", f"missing commit for {ref!r}")
        branches.append(BranchInfo(name=parse_branch_ref(ref), commit=commit))
    return branches


def parse_branch_refs(output: str) -> list[str]:
    """Parse a one-ref-per-line listing of `refs/heads/*` names."""
    return [parse_branch_ref(line.strip()) for line in output.splitlines() if line.strip()]


def parse_branch_ref(ref: str) -> str:
    if not ref.startswith(BRANCH_REF_PREFIX) or ref == BRANCH_REF_PREFIX:
        raise GitOutputParseError(
            "branch listing", f'expected a ref like "refs/heads/main"; found "{ref}"'
        )
    return ref.removeprefix(BRANCH_REF_PREFIX)


def parse_git_version(output: str) -> tuple[int, int, int]:
    """Parse `git --version`, e.g. "git version 2.39.3 (Apple Git-145)"."""
    match = _VERSION_PATTERN.match(output.strip())
    if match is None:
        raise GitOutputParseError("git version", f"unrecognised version string {output.strip()!r}")
    major, minor, patch = match.groups()
    return int(major), int(minor), int(patch or 0)
