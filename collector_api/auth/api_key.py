"""Autenticación por API Key para el endpoint de tracking.

Es un secreto compartido estático (allowlist inyectado por config), no
una identidad por tenant. Comparación exacta, sin normalización.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Header

from common.config import Settings
from ..dependencies import get_app_settings
from ..errors import Unauthorized

logger = logging.getLogger(__name__)


def require_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """Valida ``X-API-Key`` contra el allowlist.

    Raises:
        Unauthorized: header ausente o key fuera del allowlist
    """
    if not x_api_key:
        logger.warning("[Auth] Request sin API key")
        raise Unauthorized("Invalid or missing API key")

    if x_api_key not in settings.api_keys:
        logger.warning("[Auth] Invalid API key attempt - prefix=%s", x_api_key[:4])
        raise Unauthorized("Invalid or missing API key")

    return x_api_key
