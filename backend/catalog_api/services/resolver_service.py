"""Video-URL resolver integration for the Catalog API."""
from __future__ import annotations

from typing import Any
from urllib.parse import urljoin

import httpx

from backend.scraper.extractor import extract_watch_link
from backend.scraper.fetcher import PageFetcher


class ResolverServiceError(RuntimeError):
    """Raised when the external resolver cannot produce a stream payload."""


class WatchLinkNotFoundError(ResolverServiceError):
    """Raised when an episode page carries no watch link."""


class ResolverService:
    """Forwards episode watch URLs to the external resolver service."""

    def __init__(
        self,
        fetcher: PageFetcher,
        resolver_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._resolver_url = resolver_url
        self._timeout = timeout
        self._transport = transport

    def _build_url(self, base_url: str, path: str) -> str:
        normalized_base = base_url.rstrip("/") + "/"
        return urljoin(normalized_base, path)

    def watch_url(self, link_path: str) -> str:
        """Return the absolute watch URL listed on an episode page."""

        doc = self._fetcher.fetch_document(link_path)
        watch_path = extract_watch_link(doc)
        if not watch_path.strip():
            raise WatchLinkNotFoundError(f"No watch link found on {link_path}")
        return self._fetcher.base_url + watch_path

    def resolve(self, link_path: str) -> dict[str, Any]:
        """Resolve an episode page into the resolver's JSON payload."""

        target = self.watch_url(link_path)
        url = self._build_url(self._resolver_url, "")
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.get(url, params={"url": target})
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ResolverServiceError(
                f"Resolver responded with HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ResolverServiceError(f"Failed to contact resolver: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ResolverServiceError("Resolver returned invalid JSON") from exc

        if not isinstance(payload, dict):
            raise ResolverServiceError("Resolver response must be an object")

        return payload
