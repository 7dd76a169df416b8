"""Tests for the on-disk thumbnail cache."""
from __future__ import annotations

import io
from pathlib import Path

import pytest
from PIL import Image

from backend.catalog_api.services import InvalidCacheKeyError, ThumbnailCache
from backend.catalog_api.services.thumbnail_cache import detect_image_type
from backend.scraper.fetcher import PageFetcher
from conftest import UPSTREAM_BASE, UpstreamSite, make_png

COVER_URL = f"{UPSTREAM_BASE}/public/img/cover/aot.png"


@pytest.fixture()
def cache(tmp_path: Path, upstream: UpstreamSite) -> ThumbnailCache:
    fetcher = PageFetcher(UPSTREAM_BASE, transport=upstream.transport())
    return ThumbnailCache(tmp_path / "thumbs", fetcher)


@pytest.mark.parametrize("key", ["", ".", "..", "a/b", "a\\b", "../etc"])
def test_path_for_rejects_non_file_names(cache: ThumbnailCache, key: str) -> None:
    with pytest.raises(InvalidCacheKeyError):
        cache.path_for(key)


def test_ensure_downloads_once_and_reuses_file(cache: ThumbnailCache, upstream: UpstreamSite) -> None:
    first = cache.ensure("attack-on-titan", COVER_URL)
    second = cache.ensure("attack-on-titan", COVER_URL)

    assert first is not None
    assert first == second == cache.directory / "attack-on-titan"
    assert first.read_bytes() == make_png()
    assert upstream.count("/public/img/cover/aot.png") == 1
    assert cache.get("attack-on-titan") == first
    assert cache.media_type(first) == "image/png"


def test_ensure_with_blank_url_does_nothing(cache: ThumbnailCache, upstream: UpstreamSite) -> None:
    assert cache.ensure("attack-on-titan", "  ") is None
    assert upstream.requests == []
    assert cache.get("attack-on-titan") is None


def test_ensure_swallows_download_failures(cache: ThumbnailCache) -> None:
    assert cache.ensure("missing", f"{UPSTREAM_BASE}/public/img/cover/missing.png") is None
    assert cache.get("missing") is None


def test_ensure_rejects_non_image_payloads(cache: ThumbnailCache, upstream: UpstreamSite) -> None:
    upstream.pages["/public/img/cover/fake.png"] = "<html>not an image</html>"

    assert cache.ensure("fake", f"{UPSTREAM_BASE}/public/img/cover/fake.png") is None
    assert not (cache.directory / "fake").exists()


def test_ensure_with_invalid_key_returns_none(cache: ThumbnailCache) -> None:
    assert cache.ensure("../escape", COVER_URL) is None


def test_detect_image_type() -> None:
    assert detect_image_type(make_png()) == "image/png"
    assert detect_image_type(b"") is None
    assert detect_image_type(b"plain text") is None


def _large_png() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (40, 40)).save(buffer, format="PNG")
    return buffer.getvalue()


def test_oversized_images_are_rejected(
    cache: ThumbnailCache, upstream: UpstreamSite, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
    upstream.pages["/public/img/cover/huge.png"] = _large_png()

    assert detect_image_type(_large_png()) is None
    assert cache.ensure("huge", f"{UPSTREAM_BASE}/public/img/cover/huge.png") is None
    assert not (cache.directory / "huge").exists()
