"""
CSS-selector based field extraction for the upstream listing site.

Every helper takes an already parsed document and degrades to empty values
when a node or attribute is missing.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from .aggregator import parse_number
from .models import CatalogEntry, Episode

logger = logging.getLogger(__name__)

SHOW_PATH_PREFIX = "/anime/stream/"

CATALOG_LINK_SELECTOR = "#seriesContainer li a"
SEASON_NUMBER_SELECTOR = "meta[itemprop='seasonNumber']"
EPISODE_SELECTOR = "[itemprop='episode']"
EPISODE_ANCHOR_SELECTOR = ".seasonEpisodeTitle a"
EPISODE_LABEL_SELECTOR = "strong, span"
SEASON_LINK_SELECTOR = "#stream ul:first-child li a:not(.active)"
THUMBNAIL_SELECTOR = ".seriesCoverBox img"
SHOW_TITLE_SELECTOR = ".series-title h1 span"
SUMMARY_SELECTOR = "[itemprop='accessibilitySummary']"
WATCH_LINK_SELECTOR = ".generateInlinePlayer a.watchEpisode"


def _attr(node: Optional[Tag], name: str) -> str:
    if node is None:
        return ""
    value = node.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def _text(node: Optional[Tag]) -> str:
    return node.get_text() if node is not None else ""


def show_id_from_link(link_path: str) -> str:
    """Derive the stable title id from a catalog link path."""

    if link_path.startswith(SHOW_PATH_PREFIX):
        return link_path[len(SHOW_PATH_PREFIX):]
    return link_path


def show_path(show_id: str) -> str:
    return SHOW_PATH_PREFIX + show_id


def split_alternative_titles(raw: str) -> Tuple[str, ...]:
    parts = (part.strip() for part in raw.split(","))
    return tuple(part for part in parts if part)


def extract_catalog(doc: BeautifulSoup) -> List[CatalogEntry]:
    """Read every catalog link into a ``CatalogEntry``.

    Links without an id are skipped and a repeated id keeps its first
    occurrence, so ids stay unique within one snapshot.
    """

    entries: List[CatalogEntry] = []
    seen: set[str] = set()
    for anchor in doc.select(CATALOG_LINK_SELECTOR):
        link = _attr(anchor, "href")
        entry_id = show_id_from_link(link).strip("/")
        if not entry_id:
            logger.debug("Skipping catalog link without id: %r", link)
            continue
        if entry_id in seen:
            logger.debug("Skipping duplicate catalog id %s", entry_id)
            continue
        seen.add(entry_id)
        entries.append(
            CatalogEntry(
                id=entry_id,
                title=anchor.get_text().strip(),
                alternative_titles=split_alternative_titles(
                    _attr(anchor, "data-alternative-title")
                ),
                link_path=link,
            )
        )
    return entries


def extract_show_header(doc: BeautifulSoup, base_url: str) -> Tuple[str, str, str]:
    """Return ``(thumbnail_url, title, summary)`` for a show page."""

    thumbnail_path = _attr(doc.select_one(THUMBNAIL_SELECTOR), "data-src")
    thumbnail = base_url.rstrip("/") + thumbnail_path if thumbnail_path.strip() else ""
    title = _text(doc.select_one(SHOW_TITLE_SELECTOR))
    summary = _attr(doc.select_one(SUMMARY_SELECTOR), "data-full-description")
    return thumbnail, title, summary


def extract_season(doc: BeautifulSoup) -> List[Episode]:
    """Extract the episode batch listed on one season page."""

    season = parse_number(_attr(doc.select_one(SEASON_NUMBER_SELECTOR), "content"))

    episodes: List[Episode] = []
    for item in doc.select(EPISODE_SELECTOR):
        anchor = item.select_one(EPISODE_ANCHOR_SELECTOR)
        labels = anchor.select(EPISODE_LABEL_SELECTOR) if anchor is not None else []
        title = labels[0].get_text() if labels else ""
        secondary_title = labels[-1].get_text() if labels else ""
        episodes.append(
            Episode(
                link_path=_attr(anchor, "href"),
                title=title,
                secondary_title=secondary_title,
                episode_number=parse_number(_attr(item, "data-episode-season-id")),
                season_number=season,
            )
        )
    return episodes


def discover_season_links(doc: BeautifulSoup) -> List[str]:
    """Return links to the non-active season pages in document order."""

    links: List[str] = []
    for anchor in doc.select(SEASON_LINK_SELECTOR):
        href = anchor.get("href")
        if href:
            links.append(str(href))
    return links


def extract_watch_link(doc: BeautifulSoup) -> str:
    return _attr(doc.select_one(WATCH_LINK_SELECTOR), "href")
