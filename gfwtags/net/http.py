"""HTTP client abstraction for the GitHub API and raw file host.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import ssl
import time
import urllib.error
import urllib.request
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from gfwtags.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
    "is_rate_limited",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
        rate_limited: True when the server refused because of API rate limits
    """

    url: str
    status: int
    message: str
    rate_limited: bool = False

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


def is_rate_limited(status: int, headers: Mapping[str, str], body: str) -> bool:
    """Detect GitHub's primary and secondary rate limit responses."""
    if status not in (403, 429):
        return False
    remaining = {k.lower(): v for k, v in headers.items()}.get("x-ratelimit-remaining")
    if remaining is not None and remaining.strip() == "0":
        return True
    return "rate limit" in body.lower()


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Allows injecting mock clients so unit tests never touch the network.
    """

    def get_json(self, url: str) -> Result[object, HttpError]:
        """Fetch URL and parse as JSON (object or array)."""
        ...

    def get_text(self, url: str) -> Result[str, HttpError]:
        """Fetch URL and return the body as text."""
        ...

    def exists(self, url: str) -> bool:
        """HEAD probe; any failure counts as absent."""
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Handles:
    - HTTPS with system certificates
    - Optional bearer token on every request
    - Fixed delay before every request
    - Rate limit detection
    """

    def __init__(
        self,
        *,
        token: str | None = None,
        timeout: float = 30.0,
        delay: float = 0.0,
        user_agent: str = "gfw-tags",
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize HTTP client.

        Args:
            token: Bearer token attached to every request, if any
            timeout: Request timeout in seconds
            delay: Seconds to wait before each outbound request
            user_agent: User-Agent header value
            sleep: Sleep function (injectable for tests)
        """
        self.timeout = timeout
        self.delay = delay
        self.user_agent = user_agent
        self._token = token
        self._sleep = sleep
        self._ssl_context = ssl.create_default_context()

    def _headers(self, *, accept: str | None = None) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        if accept:
            headers["Accept"] = accept
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _request(
        self, url: str, *, method: str = "GET", accept: str | None = None
    ) -> Result[bytes, HttpError]:
        if self.delay > 0:
            self._sleep(self.delay)

        try:
            req = urllib.request.Request(url, headers=self._headers(accept=accept), method=method)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            body = ""
            try:
                body = e.read().decode("utf-8", errors="replace")
            except OSError:
                body = ""
            headers = dict(e.headers.items()) if e.headers is not None else {}
            limited = is_rate_limited(e.code, headers, body)
            message = "API rate limit exceeded" if limited else str(e.reason)
            return Err(HttpError(url=url, status=e.code, message=message, rate_limited=limited))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def get_json(self, url: str) -> Result[object, HttpError]:
        result = self._request(url, accept="application/vnd.github+json")
        if isinstance(result, Err):
            return result

        try:
            data: object = json.loads(result.value.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        return Ok(data)

    def get_text(self, url: str) -> Result[str, HttpError]:
        result = self._request(url)
        if isinstance(result, Err):
            return result

        try:
            return Ok(result.value.decode("utf-8"))
        except UnicodeDecodeError as e:
            return Err(HttpError(url=url, status=0, message=f"Decode error: {e}"))

    def exists(self, url: str) -> bool:
        return isinstance(self._request(url, method="HEAD"), Ok)


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.example.com/data", [{"sha": "abc"}])
        client.set_text("https://raw.example.com/file.txt", "content")
        client.exists("https://raw.example.com/file.txt")  # True
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, object | HttpError] = {}
        self._text_responses: dict[str, str | HttpError] = {}
        self._existing: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def set_json(self, url: str, response: object | HttpError) -> None:
        self._json_responses[url] = response

    def set_text(self, url: str, response: str | HttpError, *, exists: bool = True) -> None:
        """Set text response for URL; by default the URL also passes ``exists``."""
        self._text_responses[url] = response
        if exists:
            self._existing.add(url)

    def set_exists(self, url: str, exists: bool = True) -> None:
        if exists:
            self._existing.add(url)
        else:
            self._existing.discard(url)

    def get_json(self, url: str) -> Result[object, HttpError]:
        self.calls.append(("get_json", url))

        if url not in self._json_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._json_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def get_text(self, url: str) -> Result[str, HttpError]:
        self.calls.append(("get_text", url))

        if url not in self._text_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._text_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def exists(self, url: str) -> bool:
        self.calls.append(("exists", url))
        return url in self._existing

    def count(self, method: str) -> int:
        return sum(1 for m, _ in self.calls if m == method)
