"""Builders for RestackContext in tests."""

from pathlib import Path

from restack.core.config import RestackConfig
from restack.core.context import RestackContext
from restack.core.git.abc import Git
from restack.core.git.noop import NoopGit
from restack.core.user_feedback import UserFeedback
from tests.fakes.user_feedback import FakeUserFeedback
from tests.test_utils.paths import sentinel_path


def build_test_context(
    git: Git,
    *,
    cwd: Path | None = None,
    config: RestackConfig | None = None,
    feedback: UserFeedback | None = None,
    dry_run: bool = False,
) -> RestackContext:
    """Create a RestackContext around a fake git with test defaults.

    Args:
        git: Usually a FakeGit
        cwd: Operating directory (default: sentinel_path(), the main worktree)
        config: Configuration (default: RestackConfig())
        feedback: Feedback recorder (default: new FakeUserFeedback)
        dry_run: Wrap git in NoopGit, matching production behavior
    """
    if dry_run:
        git = NoopGit(git)
    return RestackContext(
        git=git,
        feedback=feedback if feedback is not None else FakeUserFeedback(),
        config=config if config is not None else RestackConfig(),
        cwd=cwd if cwd is not None else sentinel_path(),
        dry_run=dry_run,
    )
