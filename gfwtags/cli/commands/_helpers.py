"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from gfwtags.cli.errors import print_resolve_error, resolve_error_exit_code
from gfwtags.core.result import Err, Result
from gfwtags.services.errors import ResolveError

if TYPE_CHECKING:
    from gfwtags.cli.context import CLIContext


T = TypeVar("T")


def fail(error: ResolveError, ctx: CLIContext) -> NoReturn:
    print_resolve_error(error, ctx.console)
    raise typer.Exit(code=resolve_error_exit_code(error))


def exit_on_error(result: Result[T, ResolveError], ctx: CLIContext) -> T:
    """Return the value of ``result`` or exit with the code for its error.

    Replaces the pattern:
        if isinstance(result, Err):
            ctx.console.error(result.error.message)
            raise typer.Exit(code=...)
        value = result.value
    """
    if isinstance(result, Err):
        fail(result.error, ctx)
    return result.value
