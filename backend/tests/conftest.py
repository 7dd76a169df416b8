"""Shared fixtures serving a canned copy of the upstream listing site."""
from __future__ import annotations

import io
import sys
import threading
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.catalog_api import create_app  # noqa: E402
from backend.catalog_api.settings import CatalogSettings  # noqa: E402

UPSTREAM_BASE = "https://upstream.test"
RESOLVER_BASE = "http://resolver.test"


def make_png() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (2, 2), (200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


CATALOG_HTML = """
<html><body>
<div id="seriesContainer">
  <ul>
    <li><a href="/anime/stream/attack-on-titan"
           data-alternative-title="Shingeki no Kyojin, AoT">Attack on Titan</a></li>
    <li><a href="/anime/stream/attack-no-more" data-alternative-title="">Attack No More</a></li>
    <li><a href="/anime/stream/k" data-alternative-title="">K</a></li>
  </ul>
</div>
</body></html>
"""


def episode_row(number: str, link: str, *labels: str) -> str:
    label_html = "".join(
        f"<strong>{label}</strong>" if index == 0 else f"<span>{label}</span>"
        for index, label in enumerate(labels)
    )
    return (
        f'<div itemprop="episode" data-episode-season-id="{number}">'
        f'<div class="seasonEpisodeTitle"><a href="{link}">{label_html}</a></div>'
        "</div>"
    )


def show_page(
    *,
    title: str,
    season: Optional[str],
    season_links: List[tuple[str, bool]],
    episodes: List[str],
    thumbnail: str = "",
    summary: str = "",
) -> str:
    links_html = "".join(
        f'<li><a class="active" href="{href}">S</a></li>' if active else f'<li><a href="{href}">S</a></li>'
        for href, active in season_links
    )
    thumbnail_html = (
        f'<div class="seriesCoverBox"><img data-src="{thumbnail}" alt=""></div>' if thumbnail else ""
    )
    season_meta = f'<meta itemprop="seasonNumber" content="{season}">' if season is not None else ""
    return (
        "<html><body>"
        f"{thumbnail_html}"
        f'<div class="series-title"><h1><span>{title}</span></h1></div>'
        f'<p itemprop="accessibilitySummary" data-full-description="{summary}"></p>'
        f'<div id="stream"><ul>{links_html}</ul><ul><li><a href="#">1</a></li></ul></div>'
        f"{season_meta}"
        f'<div class="seasonEpisodesList">{"".join(episodes)}</div>'
        "</body></html>"
    )


AOT = "/anime/stream/attack-on-titan"

AOT_PRIMARY = show_page(
    title="Attack on Titan",
    season="1",
    thumbnail="/public/img/cover/aot.png",
    summary="Humanity fights back.",
    season_links=[(f"{AOT}/staffel-1", True), (f"{AOT}/staffel-2", False)],
    episodes=[
        episode_row("2", f"{AOT}/staffel-1/episode-2", "That Day", "Jener Tag"),
        episode_row("1", f"{AOT}/staffel-1/episode-1", "To You", "An dich"),
    ],
)

AOT_SEASON_TWO = show_page(
    title="Attack on Titan",
    season="2",
    season_links=[(f"{AOT}/staffel-1", False), (f"{AOT}/staffel-2", True)],
    episodes=[episode_row("1", f"{AOT}/staffel-2/episode-1", "Beast Titan")],
)

BROKEN = "/anime/stream/broken-show"

BROKEN_PRIMARY = show_page(
    title="Broken Show",
    season="1",
    season_links=[(f"{BROKEN}/staffel-1", True), (f"{BROKEN}/staffel-2", False)],
    episodes=[episode_row("1", f"{BROKEN}/staffel-1/episode-1", "Only")],
)

EPISODE_PAGE = """
<html><body>
<div class="generateInlinePlayer"><a class="watchEpisode" href="/redirect/12345">Watch</a></div>
</body></html>
"""

Page = Union[str, bytes, int, Callable[[], Union[str, bytes, int]]]


class UpstreamSite:
    """Routes ``httpx.MockTransport`` requests to canned upstream pages."""

    def __init__(self) -> None:
        self.pages: Dict[str, Page] = {
            "/animes": CATALOG_HTML,
            AOT: AOT_PRIMARY,
            f"{AOT}/staffel-2": AOT_SEASON_TWO,
            "/public/img/cover/aot.png": make_png(),
            BROKEN: BROKEN_PRIMARY,
            f"{BROKEN}/staffel-2": 500,
            f"{AOT}/staffel-1/episode-1": EPISODE_PAGE,
        }
        self.resolver_payload: Union[dict, int] = {"stream_url": "https://cdn.test/stream.m3u8"}
        self.requests: List[str] = []
        self.resolver_requests: List[httpx.URL] = []
        self.resolver_timeouts: List[dict] = []
        self._lock = threading.Lock()

    def count(self, path: str) -> int:
        return self.requests.count(path)

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == httpx.URL(RESOLVER_BASE).host:
            with self._lock:
                self.resolver_requests.append(request.url)
                self.resolver_timeouts.append(request.extensions.get("timeout", {}))
            if isinstance(self.resolver_payload, int):
                return httpx.Response(self.resolver_payload, json={"error": "failed"})
            return httpx.Response(200, json=self.resolver_payload)

        path = request.url.path
        with self._lock:
            self.requests.append(path)
        page = self.pages.get(path, 404)
        if callable(page):
            page = page()
        if isinstance(page, int):
            return httpx.Response(page, text="error")
        if isinstance(page, bytes):
            return httpx.Response(200, content=page, headers={"Content-Type": "image/png"})
        return httpx.Response(200, text=page, headers={"Content-Type": "text/html; charset=utf-8"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def delayed(page: str, seconds: float) -> Callable[[], str]:
    def _render() -> str:
        time.sleep(seconds)
        return page

    return _render


def timing_out() -> Callable[[], str]:
    def _render() -> str:
        raise httpx.ReadTimeout("upstream stalled")

    return _render


@pytest.fixture()
def upstream() -> UpstreamSite:
    return UpstreamSite()


@pytest.fixture()
def settings(tmp_path: Path) -> CatalogSettings:
    return CatalogSettings(
        base_url=UPSTREAM_BASE,
        resolver_url=RESOLVER_BASE,
        thumbnail_cache_dir=str(tmp_path / "cache"),
        request_timeout=5.0,
    )


@pytest.fixture()
def client(settings: CatalogSettings, upstream: UpstreamSite) -> TestClient:
    """Provide a test client whose upstream traffic is served by ``upstream``."""

    app = create_app(settings=settings, transport=upstream.transport())
    return TestClient(app)
