"""Assets estáticos: dashboard HTML, script de tracking y descriptor raíz."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from string import Template

from fastapi import APIRouter, Depends, Response
from fastapi.responses import HTMLResponse

from common.config import Settings
from ..dependencies import get_app_settings

router = APIRouter(tags=["assets"])

STATIC_DIR = Path(__file__).resolve().parents[1] / "static"


@lru_cache(maxsize=None)
def _read_asset(name: str) -> str:
    return (STATIC_DIR / name).read_text(encoding="utf-8")


def render_tracking_script(settings: Settings) -> str:
    # safe_substitute: el JS no debe romperse por un "$" ajeno a la plantilla.
    return Template(_read_asset("tracking.js")).safe_substitute(
        api_key=settings.primary_api_key,
        api_url=settings.track_url,
    )


@router.get("/")
def root():
    return {
        "message": "DVL Analytics API",
        "status": "online",
        "endpoints": {
            "health": "/api/health",
            "dashboard": "/dashboard",
            "tracking": "/dvl-analytics.js",
        },
    }


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard_page():
    return HTMLResponse(_read_asset("dashboard.html"))


@router.get("/dvl-analytics.js")
def tracking_script(settings: Settings = Depends(get_app_settings)):
    return Response(render_tracking_script(settings), media_type="application/javascript")


@router.get("/favicon.ico", include_in_schema=False)
def favicon():
    return Response(status_code=204)
