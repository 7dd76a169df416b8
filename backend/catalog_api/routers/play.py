"""Stream resolution proxy endpoint."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.scraper.fetcher import UpstreamFetchError

from ..dependencies import get_resolver_service
from ..schemas import ErrorModel
from ..services import ResolverService, ResolverServiceError, WatchLinkNotFoundError

router = APIRouter(tags=["play"])


@router.get(
    "/play",
    responses={404: {"model": ErrorModel}, 502: {"model": ErrorModel}},
    summary="Resolve an episode into a playable stream",
)
def play_episode(
    link_path: str = Query(..., min_length=1, description="Upstream path of the episode page."),
    resolver_service: ResolverService = Depends(get_resolver_service),
) -> dict[str, Any]:
    """Return the external resolver's payload for an episode page."""

    try:
        return resolver_service.resolve(link_path)
    except WatchLinkNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (ResolverServiceError, UpstreamFetchError) as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
