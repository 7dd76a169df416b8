"""Shared state container for the Catalog API."""
from __future__ import annotations

from dataclasses import dataclass

import httpx

from backend.scraper.catalog import CatalogStore
from backend.scraper.fetcher import PageFetcher

from .services import ResolverService, ShowService, ThumbnailCache
from .settings import CatalogSettings


@dataclass(slots=True)
class AppState:
    """Encapsulates the long-lived collaborators shared across routers."""

    settings: CatalogSettings
    fetcher: PageFetcher
    catalog_store: CatalogStore
    show_service: ShowService
    thumbnail_cache: ThumbnailCache
    resolver_service: ResolverService

    def __init__(
        self,
        settings: CatalogSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.fetcher = PageFetcher(
            settings.base_url,
            timeout=settings.request_timeout,
            user_agent=settings.user_agent,
            transport=transport,
        )
        self.catalog_store = CatalogStore()
        self.show_service = ShowService(
            self.fetcher,
            self.catalog_store,
            fetch_workers=settings.fetch_workers,
        )
        self.thumbnail_cache = ThumbnailCache(settings.thumbnail_cache_dir, self.fetcher)
        self.resolver_service = ResolverService(
            self.fetcher,
            settings.resolver_url,
            timeout=settings.resolver_timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Release the shared upstream HTTP client."""

        self.fetcher.close()
