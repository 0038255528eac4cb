"""Parsing of build-extra ``package-versions-*.txt`` files.

Each line is ``<package> <version>``; files were written on Windows for a
while, so both ``\\n`` and ``\\r\\n`` endings occur.
"""

from __future__ import annotations

import re

from gfwtags.core.result import Err, Ok, Result
from gfwtags.services.errors import ResolveError
from gfwtags.services.model import PACKAGE_64

_ENTRY_RE = re.compile(rf"^{re.escape(PACKAGE_64)}(?:\s+(.*))?$")


def iter_lines(text: str) -> list[str]:
    return [line.rstrip() for line in re.split(r"\r?\n", text)]


def parse_package_version(
    text: str, *, source: str = "versions file"
) -> Result[str, ResolveError]:
    """Extract the ``mingw-w64-x86_64-git`` version from a versions file.

    Only the first matching line counts. A marker with no payload after it is
    treated the same as a missing line.
    """
    for line in iter_lines(text):
        m = _ENTRY_RE.match(line)
        if m is None:
            continue
        version = (m.group(1) or "").strip()
        if not version:
            break
        return Ok(version)

    return Err(
        ResolveError(
            kind="version_line",
            message=f"no {PACKAGE_64} entry in {source}",
        )
    )


def check_version_matches(
    package_version: str, normalized_version: str, *, tag: str
) -> Result[str, ResolveError]:
    if package_version.startswith(normalized_version):
        return Ok(package_version)
    return Err(
        ResolveError(
            kind="version_line",
            message=(
                f"versions file does not match tag {tag}: "
                f"{package_version!r} does not start with {normalized_version!r}"
            ),
        )
    )
