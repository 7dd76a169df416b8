"""Application factory for the Anicat Catalog API."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from .middleware import cors_middleware
from .routers import catalog, health, play, shows
from .settings import CatalogSettings
from .state import AppState


def create_app(
    settings: CatalogSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    ``transport`` replaces the network layer of every upstream HTTP client,
    which lets tests serve canned pages through ``httpx.MockTransport``.
    """

    resolved_settings = settings or CatalogSettings()
    app_state = AppState(settings=resolved_settings, transport=transport)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            app_state.close()

    app = FastAPI(title="Anicat Catalog API", version="0.1.0", lifespan=lifespan)
    app.state.app_state = app_state
    app.state.settings = app_state.settings

    app.middleware("http")(cors_middleware)

    for router in (
        health.router,
        catalog.router,
        shows.router,
        play.router,
    ):
        app.include_router(router)

    return app
