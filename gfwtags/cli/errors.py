"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gfwtags.core.errors import ErrorCode
from gfwtags.output.console import Style
from gfwtags.services.errors import ResolveError

if TYPE_CHECKING:
    from gfwtags.output.console import ConsoleProtocol

__all__ = ["print_resolve_error", "resolve_error_exit_code"]


def print_resolve_error(error: ResolveError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def resolve_error_exit_code(error: ResolveError) -> int:
    """Get exit code for a resolve error."""
    match error.kind:
        case "invalid_input":
            return int(ErrorCode.USAGE_ERROR)
        case "fetch_failed":
            return int(ErrorCode.FETCH_ERROR)
        case "rate_limited":
            if error.stage == "sdk":
                return int(ErrorCode.SDK_COMMIT_ERROR)
            return int(ErrorCode.FETCH_ERROR)
        case "version_line":
            return int(ErrorCode.VERSION_LINE_ERROR)
        case "sdk_commit":
            return int(ErrorCode.SDK_COMMIT_ERROR)
        case "no_release":
            return int(ErrorCode.NO_RELEASE)
        case "no_candidates":
            return int(ErrorCode.NO_CANDIDATES)
        case "invalid_selection":
            return int(ErrorCode.INVALID_SELECTION)
        case "io_error":
            return int(ErrorCode.IO_ERROR)
