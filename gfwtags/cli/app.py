from __future__ import annotations

import typer

from gfwtags.cli.commands.resolve import resolve

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)

app.command()(resolve)


def main() -> None:
    app()
