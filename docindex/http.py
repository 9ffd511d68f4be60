"""Blocking HTTP helpers with typed failures."""

from __future__ import annotations

import json
from datetime import datetime
from http.client import HTTPException
from typing import Any, Mapping
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .errors import AuthFailed, NetworkError, NetworkTimeout, RateLimited, ResourceNotFound

USER_AGENT = "docindex"


def fetch_bytes(url: str, *, timeout: float, headers: Mapping[str, str] | None = None) -> bytes:
    """GET ``url`` and return the response body, mapping failures to docindex errors."""
    request_headers = {"User-Agent": USER_AGENT}
    if headers:
        request_headers.update(headers)
    request = Request(url, headers=request_headers, method="GET")
    try:
        with urlopen(request, timeout=timeout) as response:  # type: ignore[arg-type]
            return response.read()
    except HTTPError as exc:
        raise _status_error(url, exc) from exc
    except URLError as exc:
        if isinstance(exc.reason, TimeoutError):
            raise NetworkTimeout(f"Timed out after {timeout:g}s fetching {url}") from exc
        raise NetworkError(f"Failed to fetch {url}: {exc.reason}") from exc
    except TimeoutError as exc:
        raise NetworkTimeout(f"Timed out after {timeout:g}s fetching {url}") from exc
    except HTTPException as exc:
        raise NetworkError(f"Broken response from {url}: {exc!r}") from exc


def fetch_text(url: str, *, timeout: float, headers: Mapping[str, str] | None = None) -> str:
    """GET ``url`` and decode the body as UTF-8."""
    return fetch_bytes(url, timeout=timeout, headers=headers).decode("utf-8", errors="replace")


def fetch_json(url: str, *, timeout: float, headers: Mapping[str, str] | None = None) -> Any:
    """GET ``url`` and parse the body as JSON."""
    raw = fetch_bytes(url, timeout=timeout, headers=headers)
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise NetworkError(f"Invalid JSON returned by {url}") from exc


def _status_error(url: str, exc: HTTPError) -> Exception:
    status = exc.code
    headers = exc.headers if exc.headers is not None else {}
    if status == 404:
        return ResourceNotFound(f"Not found: {url}")
    if status == 429 or (status == 403 and headers.get("X-RateLimit-Remaining") == "0"):
        reset_at = _format_reset(headers.get("X-RateLimit-Reset"))
        return RateLimited(
            f"GitHub API rate limit exceeded.\n\n"
            f"The rate limit will reset at {reset_at}.\n"
            "To avoid rate limits, you can:\n"
            "  - Wait a few minutes and try again\n"
            "  - Authenticate with a GitHub token (set GITHUB_TOKEN env var)",
            reset_at=reset_at,
        )
    if status in {401, 403}:
        return AuthFailed(
            f"Access denied to {url} (HTTP {status}).\n\n"
            "If using GITHUB_TOKEN, please check that it's valid."
        )
    return NetworkError(f"Request to {url} failed with status {status}: {exc.reason}")


def _format_reset(value: str | None) -> str:
    if not value:
        return "soon"
    try:
        return datetime.fromtimestamp(int(value)).strftime("%H:%M:%S")
    except (ValueError, OverflowError, OSError):
        return "soon"


__all__ = ["USER_AGENT", "fetch_bytes", "fetch_json", "fetch_text"]
