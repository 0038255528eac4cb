"""Typed configuration loading and access.

Defaults point at the public Git for Windows repositories. An optional TOML
file can override them:

    [upstream]
    releases_repo = "git-for-windows/git"
    versions_repo = "git-for-windows/build-extra"
    versions_ref = "main"

    [sdk]
    repo_64 = "git-for-windows/git-sdk-64"
    repo_32 = "git-for-windows/git-sdk-32"
    branch = "main"

    [http]
    timeout = 30
    delay = 0
    token_env = "GITHUB_TOKEN"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_number, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "HttpConfig",
    "SdkConfig",
    "UpstreamConfig",
    "load_config",
    "resolve_token",
    "DEFAULT_TOKEN_ENV",
    "FALLBACK_TOKEN_ENV",
]

API_BASE = "https://api.github.com"
RAW_BASE = "https://raw.githubusercontent.com"

DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"
FALLBACK_TOKEN_ENV = "GH_TOKEN"

# Releases are requested as a single page.
RELEASES_PER_PAGE = 100


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class UpstreamConfig:
    """Where releases and versions files live."""

    releases_repo: str = "git-for-windows/git"
    versions_repo: str = "git-for-windows/build-extra"
    versions_ref: str = "main"
    versions_dir: str = "versions"


@dataclass(frozen=True, slots=True)
class SdkConfig:
    """The two SDK repositories whose history is correlated with releases."""

    repo_64: str = "git-for-windows/git-sdk-64"
    repo_32: str = "git-for-windows/git-sdk-32"
    branch: str = "main"


@dataclass(frozen=True, slots=True)
class HttpConfig:
    timeout: float = 30.0
    delay: float = 0.0
    token_env: str = DEFAULT_TOKEN_ENV


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container.

    ``token`` is never read from the TOML file; it is filled from the
    environment by :func:`resolve_token`.
    """

    upstream: UpstreamConfig = field(default_factory=UpstreamConfig)
    sdk: SdkConfig = field(default_factory=SdkConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    token: str | None = None

    @property
    def releases_url(self) -> str:
        repo = self.upstream.releases_repo
        return f"{API_BASE}/repos/{repo}/releases?per_page={RELEASES_PER_PAGE}"

    def versions_url(self, resource_name: str) -> str:
        u = self.upstream
        return f"{RAW_BASE}/{u.versions_repo}/{u.versions_ref}/{u.versions_dir}/{resource_name}"

    def with_delay(self, delay: float) -> Config:
        return replace(self, http=replace(self.http, delay=delay))

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        upstream: StrDict = get_table(data, "upstream") or {}
        sdk: StrDict = get_table(data, "sdk") or {}
        http: StrDict = get_table(data, "http") or {}

        defaults = cls()
        timeout = get_number(http, "timeout")
        delay = get_number(http, "delay")
        if timeout is not None and timeout <= 0:
            raise ValueError("http.timeout must be positive")
        if delay is not None and delay < 0:
            raise ValueError("http.delay cannot be negative")

        return cls(
            upstream=UpstreamConfig(
                releases_repo=get_str(upstream, "releases_repo")
                or defaults.upstream.releases_repo,
                versions_repo=get_str(upstream, "versions_repo")
                or defaults.upstream.versions_repo,
                versions_ref=get_str(upstream, "versions_ref") or defaults.upstream.versions_ref,
                versions_dir=get_str(upstream, "versions_dir") or defaults.upstream.versions_dir,
            ),
            sdk=SdkConfig(
                repo_64=get_str(sdk, "repo_64") or defaults.sdk.repo_64,
                repo_32=get_str(sdk, "repo_32") or defaults.sdk.repo_32,
                branch=get_str(sdk, "branch") or defaults.sdk.branch,
            ),
            http=HttpConfig(
                timeout=timeout if timeout is not None else defaults.http.timeout,
                delay=delay if delay is not None else defaults.http.delay,
                token_env=get_str(http, "token_env") or defaults.http.token_env,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def resolve_token(config: Config, environ: Mapping[str, str] | None = None) -> Config:
    """Fill ``config.token`` from the configured variable, then ``GH_TOKEN``."""
    env = os.environ if environ is None else environ
    for name in (config.http.token_env, FALLBACK_TOKEN_ENV):
        value = env.get(name, "").strip()
        if value:
            return replace(config, token=value)
    return replace(config, token=None)
