"""User-facing diagnostic output."""

from abc import ABC, abstractmethod

import click

from nixbrew.cli.output import user_output


class UserFeedback(ABC):
    """Provides user-facing progress and success messages.

    Commands call ctx.feedback methods instead of echoing directly so tests
    can capture messages and quiet mode can suppress progress chatter.
    Errors do not go through here: nixbrew.cli.errors reports them, since
    they can occur before a context exists.

    Usage:
        ctx.feedback.info("Installing ripgrep...")
        ctx.feedback.success("✓ Installed ripgrep")
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
        user_output(click.style(message, fg="green"))


class SuppressedFeedback(UserFeedback):
    """Feedback for --quiet: nothing is shown."""

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass
