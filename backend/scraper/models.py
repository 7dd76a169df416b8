"""Domain records produced by the scraper package."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """A single title listed on the upstream catalog page."""

    id: str
    title: str
    alternative_titles: tuple[str, ...] = ()
    link_path: str = ""

    @property
    def titles(self) -> tuple[str, ...]:
        """Primary title followed by every alternative title."""

        return (self.title, *self.alternative_titles)


@dataclass(frozen=True, slots=True)
class Episode:
    """One episode slot extracted from a season page."""

    link_path: str
    title: str
    secondary_title: str = ""
    episode_number: int = 0
    season_number: int = 0


@dataclass(slots=True)
class ShowDetail:
    """Detail payload assembled per request for a single title."""

    thumbnail: str
    title: str
    summary: str
    episodes: list[Episode] = field(default_factory=list)
