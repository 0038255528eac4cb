from __future__ import annotations

from datetime import UTC, datetime
from urllib.parse import urlencode

from gfwtags.core.config import API_BASE, Config
from gfwtags.core.result import Err, Ok, Result
from gfwtags.core.structured import as_obj_list, as_str_dict, get_str
from gfwtags.net.http import HttpClient, HttpError
from gfwtags.services.errors import RATE_LIMIT_HINT, ResolveError, ResolveErrorKind
from gfwtags.services.model import Release


def parse_timestamp(value: str) -> datetime | None:
    """Parse a GitHub ISO-8601 timestamp into an aware UTC datetime."""
    try:
        dt = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def format_until(moment: datetime) -> str:
    """Render ``moment`` the way the commits API expects ``until``."""
    utc = moment.astimezone(UTC) if moment.tzinfo else moment.replace(tzinfo=UTC)
    if utc.microsecond:
        return utc.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return utc.strftime("%Y-%m-%dT%H:%M:%SZ")


def commits_url(repo: str, *, branch: str, until: datetime) -> str:
    query = urlencode({"sha": branch, "until": format_until(until), "per_page": 1})
    return f"{API_BASE}/repos/{repo}/commits?{query}"


def _http_failure(
    error: HttpError, *, kind: ResolveErrorKind, message: str, stage: str
) -> ResolveError:
    if error.rate_limited:
        return ResolveError(
            kind="rate_limited",
            message=f"{message} (API rate limit exceeded)",
            hint=RATE_LIMIT_HINT,
            stage=stage,
        )
    return ResolveError(kind=kind, message=message, hint=str(error), stage=stage)


def list_releases(http: HttpClient, config: Config) -> Result[list[Release], ResolveError]:
    """Fetch the most recent releases, newest first, as upstream orders them."""
    result = http.get_json(config.releases_url)
    if isinstance(result, Err):
        return Err(
            _http_failure(
                result.error,
                kind="fetch_failed",
                message="failed to fetch releases",
                stage="releases",
            )
        )

    raw = as_obj_list(result.value)
    if raw is None:
        return Err(
            ResolveError(
                kind="fetch_failed",
                message="failed to fetch releases: unexpected payload",
                hint=config.releases_url,
                stage="releases",
            )
        )

    out: list[Release] = []
    for item in raw:
        d = as_str_dict(item)
        if d is None:
            continue

        tag = get_str(d, "tag_name")
        published = get_str(d, "published_at")
        if tag is None or published is None:
            continue

        published_at = parse_timestamp(published)
        if published_at is None:
            continue

        release_id = d.get("id")
        out.append(
            Release(
                tag=tag,
                name=get_str(d, "name") or tag,
                published_at=published_at,
                release_id=release_id if isinstance(release_id, int) else None,
            )
        )

    return Ok(out)


def latest_commit_before(
    http: HttpClient,
    *,
    repo: str,
    branch: str,
    until: datetime,
) -> Result[str, ResolveError]:
    """Return the sha of the newest commit on ``branch`` at or before ``until``."""
    url = commits_url(repo, branch=branch, until=until)
    result = http.get_json(url)
    if isinstance(result, Err):
        return Err(
            _http_failure(
                result.error,
                kind="sdk_commit",
                message=f"failed to query commits of {repo}",
                stage="sdk",
            )
        )

    raw = as_obj_list(result.value)
    if raw is None:
        return Err(
            ResolveError(kind="sdk_commit", message=f"unexpected commits payload: {repo}", hint=url)
        )

    if not raw:
        return Err(
            ResolveError(
                kind="sdk_commit",
                message=f"no SDK commit found before release time in {repo}",
                hint=f"until={format_until(until)}",
            )
        )

    first = as_str_dict(raw[0])
    sha = get_str(first, "sha") if first is not None else None
    if sha is None:
        return Err(ResolveError(kind="sdk_commit", message=f"missing sha in commit of {repo}"))
    return Ok(sha)
