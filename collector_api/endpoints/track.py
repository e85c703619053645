"""Endpoint de ingesta de eventos de tracking."""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.concurrency import run_in_threadpool

from common.config import Settings
from ..auth import require_api_key
from ..dependencies import get_app_settings, get_hub, get_store
from ..errors import InvalidRequest
from ..infrastructure.persistence import EventStore
from ..ingest import decode_event, ingest_event
from ..schemas import EVENT_MODELS, EventKind, TrackResult
from ..transports.websocket import NotificationHub

router = APIRouter(tags=["ingest"])
logger = logging.getLogger(__name__)

# El body se lee a mano (para responder 400 y no 422), así que el envelope
# se documenta explícitamente en OpenAPI.
TRACK_BODY_SCHEMA = {
    "type": "object",
    "required": ["type", "data"],
    "properties": {
        "type": {"type": "string", "enum": [kind.value for kind in EventKind]},
        "data": {
            "oneOf": [model.model_json_schema(by_alias=True) for model in EVENT_MODELS.values()],
        },
    },
}


@router.post(
    "/api/track",
    response_model=TrackResult,
    dependencies=[Depends(require_api_key)],
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": TRACK_BODY_SCHEMA}},
        },
    },
)
async def track(
    request: Request,
    background_tasks: BackgroundTasks,
    store: EventStore = Depends(get_store),
    hub: NotificationHub = Depends(get_hub),
    settings: Settings = Depends(get_app_settings),
):
    """Ingesta de un evento ``{type, data}``.

    La API key se valida antes de leer el body. La fila queda confirmada
    antes de responder; si la escritura falla el evento se pierde.
    """
    try:
        body = await request.json()
    except ValueError:
        raise InvalidRequest("Request body must be valid JSON")

    event = decode_event(body)
    await run_in_threadpool(ingest_event, store, event)

    # Por defecto el ingest no notifica: el dashboard refresca por polling.
    if settings.notify_on_ingest:
        background_tasks.add_task(hub.broadcast)

    return TrackResult()
