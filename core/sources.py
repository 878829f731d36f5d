"""Retrieval of prompt source documents from URLs, files, or packaged resources.

Updates:
  v0.2.2 - 2026-10-17 - Report undecodable local sources as fetch failures.
  v0.2.1 - 2026-10-04 - Read local files off the event loop.
  v0.2.0 - 2026-09-24 - Retry transient HTTP failures with the shared backoff policy.
  v0.1.0 - 2026-09-17 - Add HTTP, local, and routing fetchers.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol
from urllib.parse import urljoin, urlsplit

import httpx

from catalog import builtin_catalog_resource

from .exceptions import SourceFetchError
from .retry import RetryPolicy, async_retry, is_retryable_httpx_error

if TYPE_CHECKING:
    from collections.abc import Callable

PACKAGE_SCHEME = "package:"
_HTTP_SCHEMES = {"http", "https"}


def is_remote_location(location: str) -> bool:
    """Return ``True`` when *location* is an HTTP(S) URL."""
    return urlsplit(location).scheme.lower() in _HTTP_SCHEMES


def expand_location(template: str, *, language: str, base_url: str | None = None) -> str:
    """Fill language placeholders in *template* and anchor it to *base_url*.

    ``{language}`` expands to the lower-case code and ``{LANGUAGE}`` to the
    upper-case code. Packaged and absolute locations ignore *base_url*.
    """
    code = language.strip()
    location = template.replace("{language}", code.lower()).replace("{LANGUAGE}", code.upper())
    if (
        base_url
        and not location.startswith(PACKAGE_SCHEME)
        and not is_remote_location(location)
        and not Path(location).is_absolute()
    ):
        return urljoin(base_url if base_url.endswith("/") else f"{base_url}/", location)
    return location


class SourceFetcher(Protocol):
    """Return the text stored at a source location."""

    async def fetch(self, location: str) -> str:
        """Retrieve *location* or raise SourceFetchError."""
        ...


@dataclass(slots=True)
class HttpSourceFetcher:
    """HTTPX-backed fetcher for remote prompt sources."""

    timeout: float = 10.0
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    client_factory: Callable[[], httpx.AsyncClient] | None = None

    async def fetch(self, location: str) -> str:
        """Download *location*, retrying transient failures."""
        manage_client = self.client_factory is None
        if self.client_factory is None:
            client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        else:
            client = self.client_factory()
        try:

            async def _send_request() -> httpx.Response:
                response = await client.get(location)
                response.raise_for_status()
                return response

            response = await async_retry(
                _send_request,
                policy=self.retry_policy,
                should_retry=is_retryable_httpx_error,
            )
        except httpx.HTTPError as exc:
            raise SourceFetchError(f"Failed to fetch prompt source {location}: {exc}") from exc
        finally:
            if manage_client:
                await client.aclose()
        return response.text


@dataclass(slots=True)
class LocalSourceFetcher:
    """Read prompt sources from disk or from the packaged catalogue."""

    base_dir: Path | None = None

    async def fetch(self, location: str) -> str:
        """Return file contents for *location*."""
        if location.startswith(PACKAGE_SCHEME):
            name = location.removeprefix(PACKAGE_SCHEME).lstrip("/")
            resource = builtin_catalog_resource(name)
            try:
                return await asyncio.to_thread(resource.read_text, encoding="utf-8")
            except OSError as exc:
                raise SourceFetchError(f"Packaged prompt source missing: {name}") from exc
            except UnicodeDecodeError as exc:
                raise SourceFetchError(f"Packaged prompt source is not UTF-8: {name}") from exc
        path = Path(location).expanduser()
        if not path.is_absolute() and self.base_dir is not None:
            path = self.base_dir / path
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except OSError as exc:
            raise SourceFetchError(f"Cannot read prompt source: {path}") from exc
        except UnicodeDecodeError as exc:
            raise SourceFetchError(f"Prompt source is not UTF-8: {path}") from exc


@dataclass(slots=True)
class RoutingSourceFetcher:
    """Dispatch URLs to the HTTP fetcher and everything else to the local one."""

    http: HttpSourceFetcher = field(default_factory=HttpSourceFetcher)
    local: LocalSourceFetcher = field(default_factory=LocalSourceFetcher)

    async def fetch(self, location: str) -> str:
        """Retrieve *location* with the matching fetcher."""
        if is_remote_location(location):
            return await self.http.fetch(location)
        return await self.local.fetch(location)


__all__ = [
    "PACKAGE_SCHEME",
    "HttpSourceFetcher",
    "LocalSourceFetcher",
    "RoutingSourceFetcher",
    "SourceFetcher",
    "expand_location",
    "is_remote_location",
]
