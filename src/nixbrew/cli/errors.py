"""Error boundary for CLI commands.

Domain failures (corrupt registry, concurrent write, failed nix invocation,
bad configuration) are reported as a single red "Error:" line on stderr and
exit status 1. Anything else propagates with its traceback.
"""

from collections.abc import Callable
from functools import wraps
from typing import NoReturn, ParamSpec, TypeVar

import click

from nixbrew.cli.output import user_output
from nixbrew.core.registry import RegistryConflictError, RegistryCorruptError

REPORTED_ERRORS: tuple[type[BaseException], ...] = (
    RegistryCorruptError,
    RegistryConflictError,
    RuntimeError,
    ValueError,
    OSError,
)


P = ParamSpec("P")
R = TypeVar("R")


def report_error(message: str) -> None:
    user_output(click.style("Error: ", fg="red") + message)


def error_boundary(func: Callable[P, R]) -> Callable[P, R]:
    """Turn domain errors raised by a command into a styled message and exit 1.

    Example:
        @click.command("install")
        @click.pass_obj
        @error_boundary
        def install_cmd(ctx: NixbrewContext, ...) -> None:
            ...
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except REPORTED_ERRORS as e:
            report_error(str(e))
            raise SystemExit(1) from e

    return wrapper


def fail(message: str) -> NoReturn:
    """Report an error and exit with status 1."""
    report_error(message)
    raise SystemExit(1)
