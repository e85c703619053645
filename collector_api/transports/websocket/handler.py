"""WebSocket endpoint del notification channel (ruta raíz)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/")
async def notifications_socket(websocket: WebSocket):
    """Mantiene la conexión abierta hasta que el cliente se desconecta.

    Los mensajes del cliente solo se loguean; el servidor nunca envía
    nada salvo la señal de refresh del hub.
    """
    hub = websocket.app.state.hub
    await hub.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            logger.debug("[WebSocket] Received: %s", message.get("text") or message.get("bytes"))
    finally:
        hub.disconnect(websocket)
