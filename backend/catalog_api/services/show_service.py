"""Catalog refresh and show detail orchestration."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

from backend.scraper.aggregator import aggregate
from backend.scraper.catalog import CatalogSnapshot, CatalogStore
from backend.scraper.extractor import (
    discover_season_links,
    extract_catalog,
    extract_season,
    extract_show_header,
    show_path,
)
from backend.scraper.fetcher import PageFetcher, UpstreamFetchError
from backend.scraper.models import CatalogEntry, Episode, ShowDetail
from backend.scraper.ranking import DEFAULT_SEARCH_LIMIT, rank

logger = logging.getLogger(__name__)

CATALOG_PATH = "/animes"


class ShowService:
    """Drives the fetcher and extractors for catalog and detail requests."""

    def __init__(
        self,
        fetcher: PageFetcher,
        catalog_store: CatalogStore,
        *,
        fetch_workers: int = 4,
    ) -> None:
        self._fetcher = fetcher
        self._catalog_store = catalog_store
        self._fetch_workers = max(1, fetch_workers)

    def refresh_catalog(self) -> CatalogSnapshot:
        """Fetch the upstream catalog page and publish a new snapshot."""

        doc = self._fetcher.fetch_document(CATALOG_PATH)
        entries = extract_catalog(doc)
        snapshot = self._catalog_store.publish(entries)
        logger.info("Published catalog snapshot with %d entries", len(snapshot))
        return snapshot

    def search(self, phrase: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[CatalogEntry]:
        return rank(phrase, self._catalog_store.current(), limit)

    def load_show(self, anime_id: str) -> ShowDetail:
        """Build the detail payload for ``anime_id`` across all season pages.

        A failure fetching the primary page propagates as
        ``UpstreamFetchError``; failures on additional season pages only drop
        that page's episodes.
        """

        doc = self._fetcher.fetch_document(show_path(anime_id))
        thumbnail, title, summary = extract_show_header(doc, self._fetcher.base_url)
        primary = extract_season(doc)
        season_links = discover_season_links(doc)

        additional = self._fetch_seasons(anime_id, season_links)
        episodes = aggregate(primary, additional)
        logger.debug(
            "Aggregated %d episodes for %s from %d season pages",
            len(episodes),
            anime_id,
            len(season_links) + 1,
        )
        return ShowDetail(thumbnail=thumbnail, title=title, summary=summary, episodes=episodes)

    def _fetch_seasons(self, anime_id: str, links: Sequence[str]) -> List[List[Episode]]:
        if not links:
            return []

        def fetch(link: str) -> List[Episode]:
            try:
                return extract_season(self._fetcher.fetch_document(link))
            except UpstreamFetchError as exc:
                logger.warning("Skipping season page %s for %s: %s", link, anime_id, exc)
                return []

        workers = min(self._fetch_workers, len(links))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields results in submission order, not completion order.
            return list(executor.map(fetch, links))
