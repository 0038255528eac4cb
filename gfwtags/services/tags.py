"""Release tag filtering and normalization.

Git for Windows tags look like ``v2.41.0.windows.1``. The versions files in
build-extra are named after a shorter token: ``package-versions-2.41.0.txt``
for the first Windows build and ``package-versions-2.41.0.3.txt`` for later
ones. :func:`normalize_tag` turns a tag into that token.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from gfwtags.services.model import Release

__all__ = [
    "NORMALIZATION_RULES",
    "NormalizationRule",
    "filter_releases",
    "is_release_candidate",
    "normalize_tag",
]


_RC_RE = re.compile(r"-rc", re.IGNORECASE)
_V_PREFIX_RE = re.compile(r"^\s*[vV](?=\d)")
_FIRST_BUILD_RE = re.compile(r"\.windows\.1(?=\s*$)", re.IGNORECASE)
_WINDOWS_RE = re.compile(r"\.windows", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class NormalizationRule:
    name: str
    apply: Callable[[str], str]


def strip_v_prefix(text: str) -> str:
    # Only a "v" directly followed by a digit is a version prefix.
    return _V_PREFIX_RE.sub("", text, count=1)


def collapse_first_build(text: str) -> str:
    """``.windows.1`` is the implicit first build: ``x.windows.1`` -> ``x.windows``."""
    return _FIRST_BUILD_RE.sub(".windows", text, count=1)


def drop_windows_marker(text: str) -> str:
    # Removing one marker can splice a new one together; repeat until clean.
    while True:
        text, n = _WINDOWS_RE.subn("", text)
        if n == 0:
            return text


def trim(text: str) -> str:
    return text.strip()


NORMALIZATION_RULES: tuple[NormalizationRule, ...] = (
    NormalizationRule("strip_v_prefix", strip_v_prefix),
    NormalizationRule("collapse_first_build", collapse_first_build),
    NormalizationRule("drop_windows_marker", drop_windows_marker),
    NormalizationRule("trim", trim),
)


def normalize_tag(tag: str) -> str:
    """Derive the versions file token from a release tag.

    The rules run in order and the pass is repeated until nothing changes,
    which makes the function idempotent.

    >>> normalize_tag("v2.41.0.windows.1")
    '2.41.0'
    >>> normalize_tag("v2.41.0.windows.3")
    '2.41.0.3'
    """
    current = tag
    while True:
        updated = current
        for rule in NORMALIZATION_RULES:
            updated = rule.apply(updated)
        if updated == current:
            return updated
        current = updated


def is_release_candidate(tag: str) -> bool:
    return _RC_RE.search(tag) is not None


def filter_releases(releases: Iterable[Release], needle: str) -> list[Release]:
    """Keep non-rc releases whose tag contains ``needle`` (case-sensitive).

    Upstream order is preserved. An empty ``needle`` matches every tag.
    """
    return [r for r in releases if needle in r.tag and not is_release_candidate(r.tag)]
