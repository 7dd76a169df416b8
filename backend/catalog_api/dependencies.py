"""FastAPI dependencies for the Catalog API."""
from fastapi import Depends, Request

from .services import ResolverService, ShowService, ThumbnailCache
from .settings import CatalogSettings
from .state import AppState


def get_app_state(request: Request) -> AppState:
    """Resolve the shared application state from the FastAPI request."""
    return request.app.state.app_state


def get_settings(app_state: AppState = Depends(get_app_state)) -> CatalogSettings:
    return app_state.settings


def get_show_service(app_state: AppState = Depends(get_app_state)) -> ShowService:
    """Return the catalog/detail orchestration service."""
    return app_state.show_service


def get_thumbnail_cache(app_state: AppState = Depends(get_app_state)) -> ThumbnailCache:
    return app_state.thumbnail_cache


def get_resolver_service(app_state: AppState = Depends(get_app_state)) -> ResolverService:
    return app_state.resolver_service
