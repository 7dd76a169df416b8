"""Catalog refresh and search endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.scraper.fetcher import UpstreamFetchError

from ..dependencies import get_settings, get_show_service
from ..schemas import CatalogEntryModel, ErrorModel
from ..services import ShowService
from ..settings import CatalogSettings

router = APIRouter(tags=["catalog"])


@router.get(
    "/animes",
    response_model=list[CatalogEntryModel],
    responses={502: {"model": ErrorModel}},
    summary="Refresh and list the catalog",
)
def list_animes(
    show_service: ShowService = Depends(get_show_service),
) -> list[CatalogEntryModel]:
    """Fetch the upstream catalog, publish it as the new snapshot and return it."""

    try:
        snapshot = show_service.refresh_catalog()
    except UpstreamFetchError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return [CatalogEntryModel.from_entry(entry) for entry in snapshot]


@router.get("/search", response_model=list[CatalogEntryModel], summary="Search the catalog")
def search_animes(
    phrase: str = Query(default="", description="Free-text search phrase."),
    limit: int | None = Query(
        default=None,
        ge=0,
        le=500,
        description="Maximum number of results (defaults to the configured search limit).",
    ),
    show_service: ShowService = Depends(get_show_service),
    settings: CatalogSettings = Depends(get_settings),
) -> list[CatalogEntryModel]:
    """Rank the last published snapshot against ``phrase``."""

    resolved_limit = settings.search_limit if limit is None else limit
    results = show_service.search(phrase, resolved_limit)
    return [CatalogEntryModel.from_entry(entry) for entry in results]
