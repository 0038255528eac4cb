"""In-memory upstream used by resolver and CLI tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from gfwtags.core.config import Config
from gfwtags.net.http import MockHttpClient
from gfwtags.services.github import commits_url, parse_timestamp


def sha(prefix: str) -> str:
    return (prefix * 40)[:40]


RELEASES: list[dict[str, object]] = [
    {
        "id": 113,
        "tag_name": "v2.41.0.windows.3",
        "name": "Git for Windows 2.41.0(3)",
        "published_at": "2023-07-13T23:06:02Z",
    },
    {
        "id": 112,
        "tag_name": "v2.41.0.windows.2",
        "name": "Git for Windows 2.41.0(2)",
        "published_at": "2023-07-07T10:49:43Z",
    },
    {
        "id": 111,
        "tag_name": "v2.41.0-rc0.windows.1",
        "name": "Git for Windows v2.41.0-rc0",
        "published_at": "2023-05-20T10:00:00Z",
    },
    {
        "id": 110,
        "tag_name": "v2.40.1.windows.1",
        "name": "Git for Windows 2.40.1",
        "published_at": "2023-04-25T17:00:00Z",
    },
]

# normalized token -> (package version, sha64, sha32)
RESOLVABLE: dict[str, tuple[str, str, str]] = {
    "2.41.0.3": ("2.41.0.3.4a1821dfb0-1", sha("3a"), sha("3b")),
    "2.41.0.2": ("2.41.0.2.f2f3c1b0aa-1", sha("2a"), sha("2b")),
    "2.40.1": ("2.40.1.1.2ab0c6b2ac-1", sha("1a"), sha("1b")),
}

PUBLISHED: dict[str, str] = {
    "2.41.0.3": "2023-07-13T23:06:02Z",
    "2.41.0.2": "2023-07-07T10:49:43Z",
    "2.40.1": "2023-04-25T17:00:00Z",
}


def _empty_releases() -> list[dict[str, object]]:
    return []


@dataclass
class FakeUpstream:
    """GitHub releases, build-extra versions files and SDK histories in memory."""

    http: MockHttpClient = field(default_factory=MockHttpClient)
    config: Config = field(default_factory=Config)
    releases: list[dict[str, object]] = field(default_factory=_empty_releases)

    def set_releases(self, releases: list[dict[str, object]]) -> None:
        self.releases = releases
        self.http.set_json(self.config.releases_url, releases)

    def versions_url(self, token: str) -> str:
        return self.config.versions_url(f"package-versions-{token}.txt")

    def add_versions(self, token: str, text: str) -> None:
        self.http.set_text(self.versions_url(token), text)

    def add_commits(self, published: datetime, sha64: str | None, sha32: str | None) -> None:
        sdk = self.config.sdk
        for repo, value in ((sdk.repo_64, sha64), (sdk.repo_32, sha32)):
            url = commits_url(repo, branch=sdk.branch, until=published)
            self.http.set_json(url, [{"sha": value}] if value else [])

    def add_resolvable(self, token: str) -> None:
        package_version, sha64, sha32 = RESOLVABLE[token]
        self.add_versions(
            token,
            f"bash 5.2.015-1\r\nmingw-w64-x86_64-git {package_version}\r\n"
            "mingw-w64-x86_64-git-doc-html 2.41.0-1\r\n",
        )
        published = parse_timestamp(PUBLISHED[token])
        assert published is not None
        self.add_commits(published, sha64, sha32)
