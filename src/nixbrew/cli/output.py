"""Output utilities for CLI commands with clear intent.

user_output is for humans (stderr); machine_output is for data a caller may
pipe (stdout).
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Write a message meant for the person at the terminal to stderr."""
    click.echo(message, nl=nl, err=True)


def machine_output(message: Any = "", nl: bool = True) -> None:
    """Write data meant for scripts and pipes to stdout."""
    click.echo(message, nl=nl)
