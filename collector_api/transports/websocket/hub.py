"""Notification channel: best-effort "refresh" fan-out to dashboards.

Listeners receive only the opaque text signal ``refresh``; there is no
payload, ordering or delivery guarantee. The listener set is only
touched from the event loop.
"""

from __future__ import annotations

import logging
from typing import Any, Set

from fastapi import status

logger = logging.getLogger(__name__)

REFRESH_SIGNAL = "refresh"


class NotificationHub:
    def __init__(self) -> None:
        self._listeners: Set[Any] = set()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def connect(self, websocket: Any) -> None:
        await websocket.accept()
        self._listeners.add(websocket)
        logger.info("[WebSocket] Client connected listeners=%d", len(self._listeners))

    def disconnect(self, websocket: Any) -> None:
        if websocket in self._listeners:
            self._listeners.discard(websocket)
            logger.info("[WebSocket] Client disconnected listeners=%d", len(self._listeners))

    async def broadcast(self) -> int:
        """Send the refresh signal to every listener.

        Listeners whose send fails are dropped. Returns how many were reached.
        """
        reached = 0
        for websocket in list(self._listeners):
            try:
                await websocket.send_text(REFRESH_SIGNAL)
                reached += 1
            except Exception as e:
                logger.warning("[WebSocket] Send failed, dropping listener err=%s", type(e).__name__)
                self.disconnect(websocket)

        logger.debug("[WebSocket] Broadcast refresh reached=%d", reached)
        return reached

    async def close_all(self) -> None:
        for websocket in list(self._listeners):
            try:
                await websocket.close(code=status.WS_1001_GOING_AWAY)
            except Exception as e:
                logger.debug("[WebSocket] Close failed err=%s", type(e).__name__)
            self.disconnect(websocket)
