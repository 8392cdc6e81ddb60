"""Output utilities for CLI commands.

user_output() is for messages meant for a human (progress, plans, errors) and
goes to stderr, leaving stdout free.
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, nl=nl, err=True)
