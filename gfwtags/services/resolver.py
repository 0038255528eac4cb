"""Turn releases into resolved tracking entries.

Everything runs one request at a time: the GitHub API is rate limited and
the optional delay in the HTTP client only helps if calls are sequential.
"""

from __future__ import annotations

from collections.abc import Iterable

from gfwtags.core.config import Config
from gfwtags.core.result import Err, Ok, Result
from gfwtags.net.http import HttpClient
from gfwtags.output.console import ConsoleProtocol
from gfwtags.services.errors import RATE_LIMIT_HINT, ResolveError
from gfwtags.services.github import latest_commit_before, list_releases
from gfwtags.services.model import Candidate, Release, VersionEntry
from gfwtags.services.tags import filter_releases, normalize_tag
from gfwtags.services.versions import check_version_matches, parse_package_version


class TagResolver:
    """Release pipeline bound to one HTTP client and configuration."""

    def __init__(self, *, http: HttpClient, config: Config, console: ConsoleProtocol) -> None:
        self._http = http
        self._config = config
        self._console = console

    def matching_releases(self, needle: str) -> Result[list[Release], ResolveError]:
        """Fetch releases and keep the non-rc ones whose tag contains ``needle``."""
        fetched = list_releases(self._http, self._config)
        if isinstance(fetched, Err):
            return fetched

        self._console.debug(f"fetched {len(fetched.value)} releases")
        matched = filter_releases(fetched.value, needle)
        if not matched:
            label = f"matching '{needle}'" if needle else "found"
            return Err(ResolveError(kind="no_release", message=f"no release {label}"))
        return Ok(matched)

    def probe(self, release: Release) -> Candidate | None:
        """Return a Candidate if the release's versions file exists upstream."""
        candidate = Candidate(release=release, normalized_version=normalize_tag(release.tag))
        url = self._config.versions_url(candidate.versions_resource_name)
        self._console.debug(f"probing {url}")
        if self._http.exists(url):
            return candidate
        self._console.debug(f"{release.tag}: no {candidate.versions_resource_name}")
        return None

    def locate_candidates(self, releases: Iterable[Release]) -> list[Candidate]:
        """Probe every release, keeping upstream order."""
        out: list[Candidate] = []
        for release in releases:
            candidate = self.probe(release)
            if candidate is not None:
                out.append(candidate)
        return out

    def resolve(self, candidate: Candidate) -> Result[VersionEntry, ResolveError]:
        """Resolve package version and SDK commits for one candidate."""
        name = candidate.versions_resource_name
        url = self._config.versions_url(name)
        text = self._http.get_text(url)
        if isinstance(text, Err):
            error = text.error
            if error.rate_limited:
                return Err(
                    ResolveError(
                        kind="rate_limited",
                        message=f"failed to fetch {name} (rate limited)",
                        hint=RATE_LIMIT_HINT,
                        stage="versions",
                    )
                )
            return Err(
                ResolveError(
                    kind="fetch_failed",
                    message=f"failed to fetch {name}",
                    hint=str(error),
                    stage="versions",
                )
            )

        version = parse_package_version(text.value, source=name)
        if isinstance(version, Err):
            return version

        checked = check_version_matches(
            version.value, candidate.normalized_version, tag=candidate.tag
        )
        if isinstance(checked, Err):
            return checked

        sdk = self._config.sdk
        shas: list[str] = []
        for repo in (sdk.repo_64, sdk.repo_32):
            sha = latest_commit_before(
                self._http, repo=repo, branch=sdk.branch, until=candidate.published_at
            )
            if isinstance(sha, Err):
                return sha
            self._console.debug(f"{repo}: {sha.value}")
            shas.append(sha.value)

        return Ok(
            VersionEntry(
                tag=candidate.tag,
                package_version=checked.value,
                published_at=candidate.published_at,
                sha64=shas[0],
                sha32=shas[1],
            )
        )

    def find_latest(self, releases: Iterable[Release]) -> Result[VersionEntry, ResolveError]:
        """Return the first release that both has a versions file and resolves.

        Probing stops at the first success; failures are reported as warnings.
        """
        for release in releases:
            candidate = self.probe(release)
            if candidate is None:
                continue

            result = self.resolve(candidate)
            if isinstance(result, Ok):
                return result

            self._console.warning(f"{candidate.tag}: {result.error.message}")
            if result.error.kind == "rate_limited":
                return result

        return Err(
            ResolveError(kind="no_candidates", message="no releases with a valid versions file")
        )

    def resolve_all(
        self, candidates: Iterable[Candidate]
    ) -> Result[list[VersionEntry], ResolveError]:
        """Resolve every candidate, skipping the ones that fail.

        A rate limit ends the run and is returned as the error.
        """
        out: list[VersionEntry] = []
        for candidate in candidates:
            result = self.resolve(candidate)
            if isinstance(result, Err):
                if result.error.kind == "rate_limited":
                    return result
                self._console.warning(f"{candidate.tag}: skipped ({result.error.message})")
                continue
            out.append(result.value)
        return Ok(out)
