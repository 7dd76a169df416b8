"""On-disk thumbnail cache keyed by title id."""
from __future__ import annotations

import io
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from backend.scraper.fetcher import PageFetcher, UpstreamFetchError

logger = logging.getLogger(__name__)

_MIME_TYPES = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "WEBP": "image/webp",
    "BMP": "image/bmp",
    "TIFF": "image/tiff",
    "ICO": "image/x-icon",
}


class InvalidCacheKeyError(ValueError):
    """Raised when a title id cannot be used as a cache file name."""


def detect_image_type(data: bytes) -> Optional[str]:
    """Return the MIME type of ``data`` or ``None`` when it is not an image."""

    if not data:
        return None
    try:
        image = Image.open(io.BytesIO(data))
        image.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError):
        return None
    format_name = image.format or ""
    return _MIME_TYPES.get(format_name, f"image/{format_name.lower()}" if format_name else None)


class ThumbnailCache:
    """Stores one downloaded thumbnail per title id under ``directory``."""

    def __init__(self, directory: str | Path, fetcher: PageFetcher) -> None:
        self._directory = Path(directory).expanduser()
        self._fetcher = fetcher

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, anime_id: str) -> Path:
        if (
            not anime_id
            or anime_id in {".", ".."}
            or "/" in anime_id
            or "\\" in anime_id
            or "\x00" in anime_id
        ):
            raise InvalidCacheKeyError(f"Invalid thumbnail key: {anime_id!r}")
        return self._directory / anime_id

    def get(self, anime_id: str) -> Optional[Path]:
        """Return the cached file path if present."""

        path = self.path_for(anime_id)
        return path if path.is_file() else None

    def ensure(self, anime_id: str, url: str) -> Optional[Path]:
        """Download ``url`` into the cache unless a file already exists.

        Failures are logged and reported as ``None``; they never propagate.
        """

        try:
            path = self.path_for(anime_id)
        except InvalidCacheKeyError as exc:
            logger.warning("%s", exc)
            return None

        if path.is_file():
            return path
        if not url.strip():
            logger.info("No thumbnail URL for %s", anime_id)
            return None

        try:
            data = self._fetcher.fetch_bytes(url)
        except UpstreamFetchError as exc:
            logger.warning("Thumbnail download failed for %s: %s", anime_id, exc)
            return None

        if detect_image_type(data) is None:
            logger.warning("Thumbnail for %s is not a valid image (%s)", anime_id, url)
            return None

        try:
            self._write_atomic(path, data)
        except OSError as exc:
            logger.warning("Could not write thumbnail for %s: %s", anime_id, exc)
            return None

        logger.info("Cached thumbnail for %s (%d bytes)", anime_id, len(data))
        return path

    def media_type(self, path: Path) -> str:
        try:
            data = path.read_bytes()
        except OSError:
            return "application/octet-stream"
        return detect_image_type(data) or "application/octet-stream"

    def _write_atomic(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".thumb-")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
