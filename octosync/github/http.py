"""HTTP client abstraction for the GitHub REST API.

This module provides:
- HttpClient: Protocol for JSON GET requests (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from octosync import __version__
from octosync.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "JsonResponse",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


def _empty_headers() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class JsonResponse:
    """Decoded JSON body plus response headers (keys lowercased)."""

    url: str
    data: object
    headers: dict[str, str] = field(default_factory=_empty_headers)

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Lets tests inject canned GitHub responses instead of touching the network.
    """

    def get_json(self, url: str) -> Result[JsonResponse, HttpError]:
        """Fetch URL and parse the body as JSON."""
        ...


class RealHttpClient:
    """HTTP client using urllib.

    Sends the bearer token and GitHub media type on every request and
    verifies TLS with the system certificates.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        timeout: float = 30.0,
        user_agent: str = f"octosync/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._ssl_context = ssl.create_default_context()

    def _headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/vnd.github+json",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def get_json(self, url: str) -> Result[JsonResponse, HttpError]:
        try:
            req = urllib.request.Request(url, headers=self._headers())
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                body: bytes = response.read()
                headers = {k.lower(): v for k, v in response.headers.items()}
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=_error_message(e)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        try:
            data: object = json.loads(body.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        return Ok(JsonResponse(url=url, data=data, headers=headers))


def _error_message(error: urllib.error.HTTPError) -> str:
    """Prefer GitHub's JSON ``message`` over the bare HTTP reason."""
    try:
        payload: object = json.loads(error.read().decode("utf-8"))
    except (OSError, ValueError):
        return str(error.reason)
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
    return str(error.reason)


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.github.com/orgs/acme/repos", [{"name": "a"}])
        result = client.get_json("https://api.github.com/orgs/acme/repos")
    """

    def __init__(self) -> None:
        self._responses: dict[str, JsonResponse | HttpError] = {}
        self.calls: list[str] = []

    def set_json(
        self,
        url: str,
        data: object,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        normalized = {k.lower(): v for k, v in (headers or {}).items()}
        self._responses[url] = JsonResponse(url=url, data=data, headers=normalized)

    def set_error(self, url: str, status: int, message: str) -> None:
        self._responses[url] = HttpError(url=url, status=status, message=message)

    def get_json(self, url: str) -> Result[JsonResponse, HttpError]:
        self.calls.append(url)

        response = self._responses.get(url)
        if response is None:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
