"""Pydantic models exposed by the Catalog API."""
from __future__ import annotations

from pydantic import BaseModel, Field

from backend.scraper.models import CatalogEntry, Episode, ShowDetail


class CatalogEntryModel(BaseModel):
    """Represents one title in the catalog snapshot."""

    id: str = Field(description="Stable identifier derived from the title's link path.")
    title: str = Field(description="Primary display title.")
    alternative_titles: list[str] = Field(
        default_factory=list, description="Alternative or localized titles."
    )
    link_path: str = Field(description="Upstream path of the title's detail page.")

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "CatalogEntryModel":
        return cls(
            id=entry.id,
            title=entry.title,
            alternative_titles=list(entry.alternative_titles),
            link_path=entry.link_path,
        )


class EpisodeModel(BaseModel):
    """Represents a single episode in a show's aggregated episode list."""

    link_path: str
    title: str
    secondary_title: str = ""
    episode: int = Field(default=0, description="Episode number, 0 when unparsable.")
    season: int = Field(default=0, description="Season number, 0 when unparsable.")

    @classmethod
    def from_episode(cls, episode: Episode) -> "EpisodeModel":
        return cls(
            link_path=episode.link_path,
            title=episode.title,
            secondary_title=episode.secondary_title,
            episode=episode.episode_number,
            season=episode.season_number,
        )


class ShowDetailModel(BaseModel):
    """Detail payload for a single title."""

    thumbnail: str = Field(description="Absolute thumbnail URL, empty when unknown.")
    title: str
    summary: str
    episodes: list[EpisodeModel] = Field(default_factory=list)

    @classmethod
    def from_detail(cls, detail: ShowDetail) -> "ShowDetailModel":
        return cls(
            thumbnail=detail.thumbnail,
            title=detail.title,
            summary=detail.summary,
            episodes=[EpisodeModel.from_episode(episode) for episode in detail.episodes],
        )


class ErrorModel(BaseModel):
    """Error body returned for failed requests."""

    detail: str
