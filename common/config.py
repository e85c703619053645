from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Tuple

from dotenv import load_dotenv


SERVICE_NAME = "DVL Analytics API"
SERVICE_VERSION = "1.0.0"

DEFAULT_DB_URL = "sqlite:///./analytics.db"
DEFAULT_API_KEYS = "dvl-media-main,dvl-media-dev"


def _default_env_file() -> str:
    return str(Path.cwd() / ".env")


def _split_csv(raw: str) -> Tuple[str, ...]:
    # Empty entries are dropped so "a,,b" and trailing commas are harmless.
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    db_url: str = DEFAULT_DB_URL

    # Allowlist de API keys; la comparación es exacta (sin normalizar).
    api_keys: FrozenSet[str] = field(default_factory=lambda: frozenset(_split_csv(DEFAULT_API_KEYS)))
    # Primer key de la lista; se inyecta en el script de tracking.
    primary_api_key: str = "dvl-media-main"

    notify_on_ingest: bool = False
    cors_origins: Tuple[str, ...] = ("*",)
    public_url: str = ""
    debug_errors: bool = False

    host: str = "0.0.0.0"
    port: int = 3002
    log_level: str = "INFO"

    service_name: str = SERVICE_NAME
    service_version: str = SERVICE_VERSION

    @property
    def track_url(self) -> str:
        return f"{self.public_url.rstrip('/')}/api/track"


def get_settings() -> Settings:
    # Load env file (if present) but still allow overriding via real environment variables.
    env_file = os.getenv("ANALYTICS_ENV_FILE", _default_env_file())
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    keys = _split_csv(os.getenv("ANALYTICS_API_KEYS", DEFAULT_API_KEYS))

    return Settings(
        db_url=os.getenv("ANALYTICS_DB_URL", DEFAULT_DB_URL),
        api_keys=frozenset(keys),
        primary_api_key=keys[0] if keys else "",
        notify_on_ingest=_env_flag("ANALYTICS_NOTIFY_ON_INGEST"),
        cors_origins=_split_csv(os.getenv("ANALYTICS_CORS_ORIGINS", "*")) or ("*",),
        public_url=os.getenv("ANALYTICS_PUBLIC_URL", ""),
        debug_errors=_env_flag("ANALYTICS_DEBUG_ERRORS"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3002")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
