from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from gfwtags.core.config import Config, load_config, resolve_token
from gfwtags.core.errors import ErrorCode
from gfwtags.core.result import Err
from gfwtags.net.http import HttpClient, RealHttpClient
from gfwtags.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    http: HttpClient
    console: ConsoleProtocol


def build_context(
    *,
    config_path: Path | None = None,
    delay: float | None = None,
    verbose: bool = False,
) -> CLIContext:
    console = RichConsole(verbose=verbose)

    config = Config()
    if config_path is not None:
        config_result = load_config(config_path)
        if isinstance(config_result, Err):
            console.error(config_result.error.message)
            raise typer.Exit(code=int(ErrorCode.USAGE_ERROR))
        config = config_result.value

    if delay is not None:
        config = config.with_delay(delay)
    config = resolve_token(config)
    if config.token is None:
        console.debug("no token found, using anonymous GitHub API requests")

    http = RealHttpClient(
        token=config.token,
        timeout=config.http.timeout,
        delay=config.http.delay,
    )
    return CLIContext(config=config, http=http, console=console)
