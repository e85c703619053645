"""Decodificación y despacho de eventos de tracking.

El envelope ``{type, data}`` se decodifica a uno de los cuatro modelos
explícitos (unión etiquetada por ``EventKind``) ANTES de tocar el store.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ..errors import InvalidRequest, SchemaMismatch
from ..infrastructure.persistence import EventStore
from ..schemas import EVENT_MODELS, EventKind, TrackedEvent

logger = logging.getLogger(__name__)


def decode_event(body: Any) -> TrackedEvent:
    """Convierte el body JSON en un evento tipado.

    Raises:
        InvalidRequest: body no es objeto, ``type`` desconocido o ``data``
            ausente / no-objeto
        SchemaMismatch: ``data`` viola los invariantes del modelo destino
    """
    if not isinstance(body, dict):
        raise InvalidRequest("Request body must be a JSON object")

    try:
        kind = EventKind(body.get("type"))
    except ValueError:
        raise InvalidRequest("Invalid tracking type")

    data = body.get("data")
    if not isinstance(data, dict):
        raise InvalidRequest("Tracking data must be a JSON object")

    try:
        return EVENT_MODELS[kind].model_validate(data)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise SchemaMismatch(f"Invalid {kind.value} data: {', '.join(fields)}")


def ingest_event(store: EventStore, event: TrackedEvent) -> int:
    """Persiste el evento; la escritura queda confirmada al retornar."""
    row_id = store.insert(event.kind, event.to_row())
    logger.info("[Track] Evento registrado type=%s id=%d", event.kind.value, row_id)
    return row_id
