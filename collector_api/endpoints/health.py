"""Health endpoint (sin autenticación)."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from common.config import Settings
from ..dependencies import get_app_settings, get_store
from ..infrastructure.persistence import EventStore
from ..schemas import HealthOut

router = APIRouter(tags=["health"])


@router.get("/api/health", response_model=HealthOut)
def health(
    store: EventStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Liveness + conectividad del event store."""
    db_ok = store.ping()
    return HealthOut(
        status="healthy" if db_ok else "degraded",
        service=settings.service_name,
        version=settings.service_version,
        timestamp=datetime.now(timezone.utc),
        database="connected" if db_ok else "disconnected",
    )
