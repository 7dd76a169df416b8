"""Runtime configuration for the Catalog API."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.scraper.fetcher import DEFAULT_USER_AGENT


class CatalogSettings(BaseSettings):
    """Environment-aware settings for the Catalog API service."""

    base_url: str = Field(
        "https://aniworld.to", description="Base URL of the upstream listing site."
    )
    request_timeout: float = Field(
        default=10.0, gt=0, description="Timeout in seconds applied to every upstream request."
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT, description="User-Agent header sent to the upstream site."
    )
    fetch_workers: int = Field(
        default=4, ge=1, description="Maximum parallel season-page fetches per detail request."
    )
    search_limit: int = Field(
        default=20, ge=1, description="Default number of entries returned by /search."
    )
    thumbnail_cache_dir: str = Field(
        default="./cache", description="Directory where downloaded thumbnails are stored."
    )
    resolver_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the external video-URL resolution service.",
    )
    resolver_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for calls to the external resolution service.",
    )
    host: str = Field(default="0.0.0.0", description="Interface the API server binds to.")
    port: int = Field(default=3333, description="Port the API server listens on.")
    log_level: str = Field(default="INFO", description="Root logging level for the server.")

    model_config = SettingsConfigDict(
        env_prefix="ANICAT_",
        env_file=".env",
        env_file_encoding="utf-8",
    )
