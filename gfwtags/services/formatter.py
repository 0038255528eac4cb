from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from gfwtags.core.result import Err, Ok, Result
from gfwtags.services.errors import ResolveError
from gfwtags.services.model import VersionEntry


def format_entries(entries: Sequence[VersionEntry]) -> list[str]:
    """Newest first: every 64-bit line, one blank line, every 32-bit line."""
    ordered = sorted(entries, key=lambda e: e.published_at, reverse=True)
    return [e.line64 for e in ordered] + [""] + [e.line32 for e in ordered]


def write_entries(path: Path, lines: Sequence[str]) -> Result[Path, ResolveError]:
    """Overwrite ``path`` with the formatted blocks."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    except OSError as e:
        return Err(ResolveError(kind="io_error", message=f"cannot write {path}: {e}"))
    return Ok(path)


def already_tracked(path: Path, lines: Sequence[str]) -> Result[list[str], ResolveError]:
    """Return the non-empty ``lines`` that already appear in ``path``."""
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(
            ResolveError(kind="invalid_input", message=f"tracking file not found: {path}")
        )
    except (OSError, UnicodeDecodeError) as e:
        return Err(ResolveError(kind="invalid_input", message=f"cannot read {path}: {e}"))
    return Ok([line for line in lines if line and line in content])
