"""Tests del notification channel.

Cubre:
1. Fan-out del hub y limpieza de listeners caídos
2. Ingesta no notifica por defecto
3. Con ANALYTICS_NOTIFY_ON_INGEST cada ingesta emite "refresh"

Ejecutar:
    pytest tests/test_notifications.py -v
"""

import asyncio

import pytest

from collector_api.transports.websocket import REFRESH_SIGNAL, NotificationHub


class RecordingListener:
    """Listener falso con la interfaz mínima de WebSocket."""

    def __init__(self, fail_on_send: bool = False):
        self.accepted = False
        self.closed_with = None
        self.sent = []
        self._fail_on_send = fail_on_send

    async def accept(self):
        self.accepted = True

    async def send_text(self, text):
        if self._fail_on_send:
            raise ConnectionResetError("gone")
        self.sent.append(text)

    async def close(self, code=1000):
        self.closed_with = code


# =============================================================================
# TEST 1: HUB
# =============================================================================

class TestNotificationHub:
    @pytest.mark.asyncio
    async def test_broadcast_reaches_every_listener(self):
        hub = NotificationHub()
        listeners = [RecordingListener() for _ in range(3)]
        for listener in listeners:
            await hub.connect(listener)

        reached = await hub.broadcast()

        assert reached == 3
        assert all(l.accepted for l in listeners)
        assert all(l.sent == [REFRESH_SIGNAL] for l in listeners)

    @pytest.mark.asyncio
    async def test_failed_listener_is_dropped(self):
        hub = NotificationHub()
        good = RecordingListener()
        bad = RecordingListener(fail_on_send=True)
        await hub.connect(good)
        await hub.connect(bad)

        reached = await hub.broadcast()

        assert reached == 1
        assert hub.listener_count == 1
        assert good.sent == [REFRESH_SIGNAL]

    @pytest.mark.asyncio
    async def test_disconnect_is_idempotent(self):
        hub = NotificationHub()
        listener = RecordingListener()
        await hub.connect(listener)

        hub.disconnect(listener)
        hub.disconnect(listener)

        assert hub.listener_count == 0
        assert await hub.broadcast() == 0
        assert listener.sent == []

    @pytest.mark.asyncio
    async def test_close_all(self):
        hub = NotificationHub()
        listeners = [RecordingListener(), RecordingListener()]
        for listener in listeners:
            await hub.connect(listener)

        await hub.close_all()

        assert hub.listener_count == 0
        assert all(l.closed_with == 1001 for l in listeners)


# =============================================================================
# TEST 2/3: INGESTA -> NOTIFICACIÓN
# =============================================================================

class TestIngestWiring:
    def test_ingest_does_not_notify_by_default(self, client, auth_headers):
        listener = RecordingListener()
        asyncio.run(client.app.state.hub.connect(listener))

        resp = client.post("/api/track", json={"type": "form", "data": {}}, headers=auth_headers)

        assert resp.status_code == 200
        assert listener.sent == []

    def test_ingest_notifies_when_enabled(self, notify_client, auth_headers):
        listener = RecordingListener()
        asyncio.run(notify_client.app.state.hub.connect(listener))

        notify_client.post("/api/track", json={"type": "form", "data": {}}, headers=auth_headers)
        notify_client.post("/api/track", json={"type": "user", "data": {}}, headers=auth_headers)

        assert listener.sent == [REFRESH_SIGNAL, REFRESH_SIGNAL]

    def test_rejected_ingest_does_not_notify(self, notify_client, auth_headers):
        listener = RecordingListener()
        asyncio.run(notify_client.app.state.hub.connect(listener))

        notify_client.post("/api/track", json={"type": "bogus", "data": {}}, headers=auth_headers)
        notify_client.post("/api/track", json={"type": "form", "data": {}}, headers={"X-API-Key": "nope"})

        assert listener.sent == []

    def test_websocket_client_receives_refresh(self, notify_client, auth_headers):
        with notify_client.websocket_connect("/") as ws:
            ws.send_text("hello")
            notify_client.post("/api/track", json={"type": "form", "data": {}}, headers=auth_headers)

            assert ws.receive_text() == REFRESH_SIGNAL
