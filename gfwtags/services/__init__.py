"""Release lookup services."""

from .errors import ResolveError
from .model import Candidate, Release, VersionEntry
from .resolver import TagResolver
from .tags import filter_releases, normalize_tag

__all__ = [
    "Candidate",
    "Release",
    "ResolveError",
    "TagResolver",
    "VersionEntry",
    "filter_releases",
    "normalize_tag",
]
