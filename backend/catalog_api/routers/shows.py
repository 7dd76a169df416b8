"""Show detail and thumbnail endpoints."""
from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from fastapi.responses import FileResponse

from backend.scraper.fetcher import UpstreamFetchError

from ..dependencies import get_show_service, get_thumbnail_cache
from ..schemas import ErrorModel, ShowDetailModel
from ..services import InvalidCacheKeyError, ShowService, ThumbnailCache

router = APIRouter(tags=["shows"])


@router.get(
    "/anime/{anime_id}",
    response_model=ShowDetailModel,
    responses={502: {"model": ErrorModel}},
    summary="Show detail with aggregated episodes",
)
def get_anime(
    anime_id: str,
    background_tasks: BackgroundTasks,
    show_service: ShowService = Depends(get_show_service),
    thumbnail_cache: ThumbnailCache = Depends(get_thumbnail_cache),
) -> ShowDetailModel:
    """Return the show detail and cache its thumbnail in the background."""

    try:
        detail = show_service.load_show(anime_id)
    except UpstreamFetchError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    if detail.thumbnail.strip():
        background_tasks.add_task(thumbnail_cache.ensure, anime_id, detail.thumbnail)

    return ShowDetailModel.from_detail(detail)


@router.get(
    "/thumbnail/{anime_id}",
    response_class=FileResponse,
    responses={404: {"model": ErrorModel}, 502: {"model": ErrorModel}},
    summary="Cached show thumbnail",
)
def get_thumbnail(
    anime_id: str,
    show_service: ShowService = Depends(get_show_service),
    thumbnail_cache: ThumbnailCache = Depends(get_thumbnail_cache),
) -> FileResponse:
    """Serve the cached thumbnail, downloading it first on a cache miss."""

    try:
        path = thumbnail_cache.get(anime_id)
    except InvalidCacheKeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    if path is None:
        try:
            detail = show_service.load_show(anime_id)
        except UpstreamFetchError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        path = thumbnail_cache.ensure(anime_id, detail.thumbnail)

    if path is None:
        raise HTTPException(status_code=404, detail=f"No thumbnail available for {anime_id}")

    return FileResponse(path, media_type=thumbnail_cache.media_type(path))
