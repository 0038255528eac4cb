from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

PACKAGE_64 = "mingw-w64-x86_64-git"
PACKAGE_32 = "mingw-w64-i686-git"


@dataclass(frozen=True, slots=True)
class Release:
    """A published Git for Windows release."""

    tag: str
    name: str
    published_at: datetime  # UTC
    release_id: int | None = None


@dataclass(frozen=True, slots=True)
class Candidate:
    """A release whose versions file exists upstream."""

    release: Release
    normalized_version: str

    @property
    def tag(self) -> str:
        return self.release.tag

    @property
    def published_at(self) -> datetime:
        return self.release.published_at

    @property
    def versions_resource_name(self) -> str:
        return f"package-versions-{self.normalized_version}.txt"


@dataclass(frozen=True, slots=True)
class VersionEntry:
    """One fully resolved release, ready to print."""

    tag: str
    package_version: str
    published_at: datetime
    sha64: str
    sha32: str

    @property
    def line64(self) -> str:
        return f"{PACKAGE_64} {self.package_version} {self.sha64}"

    @property
    def line32(self) -> str:
        return f"{PACKAGE_32} {self.package_version} {self.sha32}"
