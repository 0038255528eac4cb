from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal

from gfwtags.core.result import Err, Ok, Result
from gfwtags.output.console import ConsoleProtocol, Style
from gfwtags.services.errors import ResolveError
from gfwtags.services.model import Candidate

QUIT_TOKENS = frozenset({"q", "Q"})

InputReader = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class SelectorResult:
    action: Literal["select", "quit"]
    value: Candidate | None
    index: int  # 1-based, 0 on quit


def _label(candidate: Candidate) -> str:
    published = candidate.published_at.strftime("%Y-%m-%d %H:%M:%S UTC")
    return f"{candidate.tag}  {published}"


def parse_selection(raw: str, count: int) -> Result[int | None, ResolveError]:
    """Parse prompt input into a 1-based index, or None for quit.

    Empty input picks the first (newest) entry.
    """
    token = raw.strip()
    if token in QUIT_TOKENS:
        return Ok(None)
    if not token:
        return Ok(1)

    # int() would also take "1_0" and non-ASCII digits.
    if not (token.isascii() and token.removeprefix("-").isdigit()):
        return Err(
            ResolveError(
                kind="invalid_selection",
                message=f"selection is not a number: {token!r}",
            )
        )
    index = int(token)

    if not 1 <= index <= count:
        return Err(
            ResolveError(
                kind="invalid_selection",
                message=f"selection out of range: {index}",
                hint=f"choose 1-{count}",
            )
        )
    return Ok(index)


def select_candidate(
    candidates: Sequence[Candidate],
    *,
    console: ConsoleProtocol,
    read_input: InputReader = input,
) -> Result[SelectorResult, ResolveError]:
    """Ask the user to pick one candidate from a numbered list.

    The list is printed newest first, as GitHub returned it. End of input
    counts as quit.
    """
    if not candidates:
        raise ValueError("selector requires at least one candidate")

    console.header("Matching releases")
    for i, candidate in enumerate(candidates, start=1):
        console.print(f"  {i}) {_label(candidate)}")

    try:
        raw = read_input(f"Select a release [1], q to quit (1-{len(candidates)}): ")
    except EOFError:
        raw = "q"

    parsed = parse_selection(raw, len(candidates))
    if isinstance(parsed, Err):
        return parsed

    index = parsed.value
    if index is None:
        console.print("cancelled", Style.DIM)
        return Ok(SelectorResult(action="quit", value=None, index=0))
    return Ok(SelectorResult(action="select", value=candidates[index - 1], index=index))
