"""Tests for UserFeedback implementations."""

import pytest

from restack.core.user_feedback import InteractiveFeedback, SuppressedFeedback


def test_interactive_feedback_writes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    feedback = InteractiveFeedback()

    feedback.info("Detaching 2 worktree(s)...")
    feedback.success("✓ Rebased 1 branch(es)")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Detaching 2 worktree(s)..." in captured.err
    assert "✓ Rebased 1 branch(es)" in captured.err


def test_suppressed_feedback_writes_nothing(capsys: pytest.CaptureFixture[str]) -> None:
    feedback = SuppressedFeedback()

    feedback.info("Detaching 2 worktree(s)...")
    feedback.success("✓ Rebased 1 branch(es)")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""
