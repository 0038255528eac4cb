from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import typer

from gfwtags import __version__
from gfwtags.cli.commands._helpers import exit_on_error, fail
from gfwtags.cli.context import CLIContext, build_context
from gfwtags.cli.prompt import InputReader, select_candidate
from gfwtags.core.errors import ErrorCode
from gfwtags.services.errors import ResolveError
from gfwtags.services.formatter import already_tracked, format_entries, write_entries
from gfwtags.services.model import Candidate, VersionEntry
from gfwtags.services.resolver import TagResolver


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def resolve(
    needle: str | None = typer.Argument(
        None,
        metavar="FILTER",
        help="Substring of the release tag, e.g. 2.41.0",
    ),
    latest: bool = typer.Option(
        False, "--latest", "-l", help="Pick the newest matching release that resolves."
    ),
    resolve_all: bool = typer.Option(
        False, "--all", "-a", help="Resolve every matching release."
    ),
    delay: float | None = typer.Option(
        None,
        "--delay",
        min=0.0,
        help="Seconds to wait before each request (default: from config, 0).",
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Also write the lines to this file (overwritten)."
    ),
    tracking_file: Path | None = typer.Option(
        None,
        "--tracking-file",
        help="Report which lines are already present in this file.",
    ),
    config_path: Path | None = typer.Option(None, "--config", help="TOML config file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Print the SDK tracking lines for a Git for Windows release."""
    del version
    ctx = build_context(config_path=config_path, delay=delay, verbose=verbose)
    run_resolve(
        ctx,
        needle=needle,
        latest=latest,
        resolve_all=resolve_all,
        output=output,
        tracking_file=tracking_file,
    )


def run_resolve(
    ctx: CLIContext,
    *,
    needle: str | None,
    latest: bool = False,
    resolve_all: bool = False,
    output: Path | None = None,
    tracking_file: Path | None = None,
    read_input: InputReader = input,
) -> list[VersionEntry]:
    """Run the pipeline and print the result.

    Exits through ``typer.Exit`` on every failure and on interactive quit.
    """
    if latest and resolve_all:
        fail(ResolveError(kind="invalid_input", message="--latest and --all are exclusive"), ctx)
    if not needle and not (latest or resolve_all):
        fail(
            ResolveError(
                kind="invalid_input",
                message="missing version filter",
                hint="pass a tag substring such as 2.41.0, or use --latest / --all",
            ),
            ctx,
        )
    if tracking_file is not None and not tracking_file.is_file():
        fail(
            ResolveError(
                kind="invalid_input",
                message=f"tracking file not found: {tracking_file}",
            ),
            ctx,
        )

    resolver = TagResolver(http=ctx.http, config=ctx.config, console=ctx.console)
    releases = exit_on_error(resolver.matching_releases(needle or ""), ctx)

    if latest:
        entries = [exit_on_error(resolver.find_latest(releases), ctx)]
    else:
        candidates = resolver.locate_candidates(releases)
        if not candidates:
            fail(
                ResolveError(
                    kind="no_candidates",
                    message="no releases with a valid versions file",
                    hint=f"{len(releases)} release(s) matched, none has a versions file",
                ),
                ctx,
            )
        if resolve_all:
            entries = exit_on_error(resolver.resolve_all(candidates), ctx)
            if not entries:
                fail(
                    ResolveError(
                        kind="no_candidates",
                        message="no releases with a valid versions file",
                        hint="every candidate failed to resolve",
                    ),
                    ctx,
                )
        else:
            chosen = _choose(ctx, candidates, read_input)
            entries = [exit_on_error(resolver.resolve(chosen), ctx)]

    _emit(ctx, entries, output=output, tracking_file=tracking_file)
    return entries


def _choose(
    ctx: CLIContext, candidates: Sequence[Candidate], read_input: InputReader
) -> Candidate:
    if len(candidates) == 1:
        return candidates[0]

    selection = exit_on_error(
        select_candidate(candidates, console=ctx.console, read_input=read_input), ctx
    )
    if selection.action == "quit" or selection.value is None:
        raise typer.Exit(code=int(ErrorCode.OK))
    return selection.value


def _emit(
    ctx: CLIContext,
    entries: Sequence[VersionEntry],
    *,
    output: Path | None,
    tracking_file: Path | None,
) -> None:
    lines = format_entries(entries)
    for line in lines:
        ctx.console.line(line)

    if output is not None:
        written = exit_on_error(write_entries(output, lines), ctx)
        ctx.console.success(f"wrote {written}")

    if tracking_file is not None:
        tracked = exit_on_error(already_tracked(tracking_file, lines), ctx)
        for line in tracked:
            ctx.console.info(f"already tracked: {line}")
