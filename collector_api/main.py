from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from common.config import SERVICE_NAME, SERVICE_VERSION, Settings, get_settings
from .endpoints import assets_router, dashboard_router, health_router, track_router
from .errors import AnalyticsError
from .infrastructure.persistence import EventStore
from .transports.websocket import NotificationHub
from .transports.websocket.handler import router as websocket_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    # Si el store no abre, StoreUnavailable aborta el arranque.
    store = EventStore.open(settings.db_url)
    app.state.store = store
    app.state.hub = NotificationHub()
    logger.info(
        "%s v%s ready notify_on_ingest=%s api_keys=%d",
        settings.service_name,
        settings.service_version,
        settings.notify_on_ingest,
        len(settings.api_keys),
    )
    try:
        yield
    finally:
        # uvicorn ya drenó los requests en curso al llegar aquí.
        await app.state.hub.close_all()
        store.close()
        logger.info("%s stopped", settings.service_name)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AnalyticsError)
    async def analytics_error_handler(request: Request, exc: AnalyticsError):
        settings: Settings = request.app.state.settings
        message = exc.message
        if exc.status_code >= 500 and exc.__cause__ is not None and settings.debug_errors:
            message = f"{message}: {exc.__cause__}"
        return JSONResponse(status_code=exc.status_code, content={"error": message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(track_router)
    app.include_router(dashboard_router)
    app.include_router(assets_router)
    app.include_router(websocket_router)
    return app


app = create_app()
