"""Tests for the restack command."""

from click.testing import CliRunner

from restack.cli.cli import cli
from restack.core.config import RestackConfig
from tests.fakes.git import FakeGit
from tests.fakes.user_feedback import FakeUserFeedback
from tests.test_utils.context import build_test_context
from tests.test_utils.repos import ROOT, WT_B, stacked_chain_repo


def _develop_repo() -> FakeGit:
    """main and develop both exist; feature is built on main's commit."""
    return FakeGit(
        commits={"M0": None, "D1": "M0", "F1": "M0"},
        branches={"main": "M0", "develop": "D1", "feature": "F1"},
        worktrees=[(ROOT, "develop")],
    )


def test_restack_success() -> None:
    git = stacked_chain_repo()
    feedback = FakeUserFeedback()
    ctx = build_test_context(git, feedback=feedback)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Rebase onto main" in result.output
    assert feedback.success_messages == ["✓ Rebased 1 branch(es) onto 'main' (M1)"]
    assert git.is_ancestor("M1", git.branch_commits["b"])


def test_restack_quiet_hides_plan() -> None:
    ctx = build_test_context(stacked_chain_repo())

    result = CliRunner().invoke(cli, ["--quiet"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Rebase onto" not in result.output


def test_restack_nothing_to_do() -> None:
    git = FakeGit(commits={"M0": None}, branches={"main": "M0"}, worktrees=[(ROOT, "main")])
    feedback = FakeUserFeedback()

    result = CliRunner().invoke(cli, [], obj=build_test_context(git, feedback=feedback))

    assert result.exit_code == 0, result.output
    assert "Nothing to rebase onto main" in result.output
    assert feedback.success_messages == ["✓ Rebased 0 branch(es) onto 'main' (M0)"]


def test_restack_dry_run() -> None:
    git = stacked_chain_repo()
    feedback = FakeUserFeedback()
    ctx = build_test_context(git, feedback=feedback, dry_run=True)

    result = CliRunner().invoke(cli, ["--dry-run"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "[DRY RUN]" in result.output
    assert "Would run: git rebase --update-refs main" in result.output
    assert feedback.success_messages == ["✓ Dry run complete: 1 branch(es) would be rebased"]
    assert git.branch_commits == {"main": "M0", "a": "A0", "b": "B0"}


def test_restack_target_flag() -> None:
    git = _develop_repo()
    feedback = FakeUserFeedback()

    result = CliRunner().invoke(
        cli, ["--target", "main"], obj=build_test_context(git, feedback=feedback)
    )

    assert result.exit_code == 0, result.output
    assert feedback.success_messages == ["✓ Rebased 2 branch(es) onto 'main' (M0)"]
    assert git.branch_commits["develop"] == "D1"


def test_restack_target_from_config() -> None:
    git = _develop_repo()
    ctx = build_test_context(git, config=RestackConfig(target_branch="develop"))

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Rebase onto develop" in result.output
    assert git.is_ancestor("D1", git.branch_commits["feature"])


def test_restack_target_flag_beats_config() -> None:
    git = _develop_repo()
    feedback = FakeUserFeedback()
    ctx = build_test_context(
        git, config=RestackConfig(target_branch="develop"), feedback=feedback
    )

    result = CliRunner().invoke(cli, ["-t", "main"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "onto 'main'" in feedback.success_messages[0]


def test_restack_error_exits_1() -> None:
    git = stacked_chain_repo(dirty_worktrees={WT_B})

    result = CliRunner().invoke(cli, [], obj=build_test_context(git))

    assert result.exit_code == 1
    assert "Error: " in result.output
    assert "Uncommitted changes" in result.output
    assert str(WT_B) in result.output
    assert git.operations == []


def test_restack_unknown_target_exits_1() -> None:
    result = CliRunner().invoke(
        cli, ["--target", "nope"], obj=build_test_context(stacked_chain_repo())
    )

    assert result.exit_code == 1
    assert "Target branch 'nope' does not exist" in result.output


def test_restack_conflict_exits_1_and_restores() -> None:
    git = stacked_chain_repo(conflicting_branches={"b"})

    result = CliRunner().invoke(cli, [], obj=build_test_context(git))

    assert result.exit_code == 1
    assert "Rebasing 'b' failed" in result.output
    assert git.current_branch(ROOT) == "main"
    assert git.current_branch(WT_B) == "b"


def test_restack_rejects_positional_arguments() -> None:
    result = CliRunner().invoke(cli, ["main"], obj=build_test_context(stacked_chain_repo()))

    assert result.exit_code == 2
    assert "unexpected extra argument" in result.output


def test_restack_help() -> None:
    result = CliRunner().invoke(cli, ["-h"])

    assert result.exit_code == 0
    assert "--target" in result.output
    assert "--dry-run" in result.output
    assert "--update-refs" in result.output
