"""Módulo de endpoints HTTP.

Contiene todos los endpoints de la API del collector organizados por función.
"""

from .assets import router as assets_router
from .dashboard import router as dashboard_router
from .health import router as health_router
from .track import router as track_router

__all__ = [
    "assets_router",
    "dashboard_router",
    "health_router",
    "track_router",
]
