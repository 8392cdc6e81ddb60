"""User-facing progress output with mode awareness."""

from abc import ABC, abstractmethod

import click

from restack.cli.output import user_output


class UserFeedback(ABC):
    """Provides user-facing progress output that's mode-aware.

    Phases report progress through ctx.feedback instead of threading a
    'quiet' boolean through every function signature. Errors are not routed
    through here: the CLI prints them whatever the mode.

    Usage:
        ctx.feedback.info("Detaching worktrees...")
        detach_worktrees(ctx.git, inventory.worktrees)
        ctx.feedback.success("✓ Rebased 3 branch(es)")
    """

    @abstractmethod
    def info(self, message: str) -> None:
        """Show informational message (suppressed in quiet mode)."""

    @abstractmethod
    def success(self, message: str) -> None:
        """Show success message (suppressed in quiet mode)."""


class InteractiveFeedback(UserFeedback):
    """Feedback shown in interactive mode (all messages)."""

    def info(self, message: str) -> None:
        user_output(message)

    def success(self, message: str) -> None:
        """Show success message in green."""
        user_output(click.style(message, fg="green"))


class SuppressedFeedback(UserFeedback):
    """Feedback for --quiet runs (nothing shown)."""

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass
