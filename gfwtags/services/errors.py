from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ResolveErrorKind = Literal[
    "invalid_input",
    "fetch_failed",
    "rate_limited",
    "version_line",
    "sdk_commit",
    "no_release",
    "no_candidates",
    "invalid_selection",
    "io_error",
]

RATE_LIMIT_HINT = "set GITHUB_TOKEN (or GH_TOKEN) or increase --delay"


@dataclass(frozen=True, slots=True)
class ResolveError:
    kind: ResolveErrorKind
    message: str
    hint: str | None = None
    # Pipeline stage that hit a rate limit: "releases", "versions" or "sdk".
    stage: str | None = None
