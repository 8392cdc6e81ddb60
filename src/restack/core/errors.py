"""Error taxonomy for restack runs.

Every failure the orchestration core can report derives from RestackError so the
CLI can print it and exit 1 without a traceback. Pre-flight errors (version,
repository, dirty worktrees) are raised before anything is mutated; everything
raised after detachment is merged with any restoration failure.
"""

from collections.abc import Iterable, Sequence
from pathlib import Path


class RestackError(Exception):
    """Base class for all restack failures."""


class ToolVersionError(RestackError):
    """The installed git is too old for `rebase --update-refs`."""

    def __init__(self, found: str, required: str) -> None:
        self.found = found
        self.required = required
        super().__init__(
            f"git {required} or newer is required for `rebase --update-refs` (found {found})"
        )


class NotARepositoryError(RestackError):
    """The operating directory is not inside a git work tree."""

    def __init__(self, cwd: Path) -> None:
        self.cwd = cwd
        super().__init__(f"{cwd} is not inside a git repository")


class DiscoveryError(RestackError):
    """Worktrees, branches or the target branch could not be discovered."""


class GitOutputParseError(DiscoveryError):
    """Output of a git listing command did not have the expected shape."""

    def __init__(self, what: str, detail: str) -> None:
        self.what = what
        self.detail = detail
        super().__init__(f"Malformed {what}: {detail}")


class DirtyWorktreeError(RestackError):
    """One or more worktrees have uncommitted changes."""

    def __init__(self, paths: Sequence[Path]) -> None:
        self.paths = tuple(paths)
        listing = "\n".join(f"  {path}" for path in self.paths)
        super().__init__(
            "Uncommitted changes found; commit or stash them before restacking:\n" + listing
        )


class GraphConsistencyError(RestackError):
    """A branch referenced by the branch graph is missing from the snapshot."""

    def __init__(self, branch: str, context: str) -> None:
        self.branch = branch
        super().__init__(f"Branch '{branch}' {context} is not in the branch snapshot")


class BranchTopologyError(RestackError):
    """An interior branch forks into several leaves and cannot ride along safely."""

    def __init__(self, forks: dict[str, tuple[str, ...]]) -> None:
        self.forks = forks
        lines = [
            f"  {branch} -> {', '.join(leaves)}" for branch, leaves in sorted(forks.items())
        ]
        super().__init__(
            "Branches with more than one dependent leaf are not supported; "
            "rebase these manually:\n" + "\n".join(lines)
        )


class GitCommandError(RestackError):
    """A git invocation failed."""

    def __init__(
        self,
        operation: str,
        *,
        cwd: Path | None,
        command: Sequence[str],
        returncode: int | None,
        output: str,
    ) -> None:
        self.operation = operation
        self.cwd = cwd
        self.command = tuple(command)
        self.returncode = returncode
        self.output = output

        message = f"Failed to {operation}"
        if cwd is not None:
            message += f" (in {cwd})"
        message += f"\nCommand: {' '.join(self.command)}"
        if returncode is not None:
            message += f"\nExit code: {returncode}"
        if output:
            message += f"\n{output}"
        super().__init__(message)


class RebaseConflictError(RestackError):
    """A rebase failed; carries the outcome of the abort that followed it."""

    def __init__(
        self, branch: str, cause: BaseException, abort_error: BaseException | None
    ) -> None:
        self.branch = branch
        self.cause = cause
        self.abort_error = abort_error

        message = f"Rebasing '{branch}' failed: {cause}"
        if abort_error is None:
            message += "\nThe rebase was aborted; the branch is unchanged."
        else:
            message += f"\nAborting the rebase also failed: {abort_error}"
        super().__init__(message)


class RestoreError(RestackError):
    """A worktree could not be returned to its original branch."""

    def __init__(self, path: Path, branch: str, cause: BaseException) -> None:
        self.path = path
        self.branch = branch
        self.cause = cause
        super().__init__(
            f"Could not restore {path} to '{branch}' (it may be left on a detached HEAD): {cause}"
        )


class ConfigError(RestackError):
    """The configuration file is malformed."""


class CombinedError(RestackError):
    """Several failures reported together, none of them dropped.

    Nested CombinedErrors are flattened into this one.
    """

    def __init__(self, errors: Sequence[BaseException]) -> None:
        self.errors = tuple(_flatten(errors))
        super().__init__("\n".join(str(error) for error in self.errors))


def join_errors(*errors: BaseException | None) -> BaseException | None:
    """Merge errors into one, skipping None and flattening nested CombinedErrors.

    Returns None when there is nothing to report and the error itself when only
    one remains.
    """
    flattened = list(_flatten(errors))
    if not flattened:
        return None
    if len(flattened) == 1:
        return flattened[0]
    return CombinedError(flattened)


def _flatten(errors: Iterable[BaseException | None]) -> Iterable[BaseException]:
    for error in errors:
        if error is None:
            continue
        if isinstance(error, CombinedError):
            yield from error.errors
        else:
            yield error
