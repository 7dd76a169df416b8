"""HTTP document fetching for the upstream listing site."""
from __future__ import annotations

from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0"
)


class UpstreamFetchError(RuntimeError):
    """Raised when an upstream document cannot be retrieved."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url


class PageFetcher:
    """Thin wrapper around a shared HTTPX client bound to the upstream site."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
        )

    def build_url(self, path: str) -> str:
        """Resolve a site-relative link path against the base URL."""

        return urljoin(self.base_url + "/", path)

    def get(self, path: str, *, params: dict[str, str] | None = None) -> httpx.Response:
        """Resolve ``path`` and issue a GET, raising ``UpstreamFetchError`` on any failure.

        Malformed links count as upstream failures so one bad href or cover
        path degrades like an unreachable page.
        """

        url = path
        try:
            url = self.build_url(path)
            response = self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamFetchError(
                url, f"Upstream responded with HTTP {exc.response.status_code}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise UpstreamFetchError(url, "Upstream request timed out") from exc
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(url, f"Failed to contact upstream: {exc}") from exc
        except (httpx.InvalidURL, ValueError) as exc:
            raise UpstreamFetchError(url, f"Invalid upstream URL: {exc}") from exc
        return response

    def fetch_document(self, path: str) -> BeautifulSoup:
        """Fetch ``path`` from the upstream site and parse it as HTML."""

        response = self.get(path)
        return BeautifulSoup(response.text, "html.parser")

    def fetch_bytes(self, url: str) -> bytes:
        """Download raw bytes from an absolute URL."""

        return self.get(url).content

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    def close(self) -> None:
        self._client.close()
