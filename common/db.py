from __future__ import annotations

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url


logger = logging.getLogger(__name__)


def build_engine(url: str) -> Engine:
    """Crea el engine SQLAlchemy para el event store.

    No hace test de conexión; eso lo decide quien abre el store.
    """
    parsed = make_url(url)
    connect_args = {}
    if parsed.get_backend_name() == "sqlite":
        # FastAPI ejecuta endpoints sync en un threadpool.
        connect_args["check_same_thread"] = False

    # Log básico de parámetros de conexión (sin contraseña)
    logger.info(
        "[DB] Crear engine url=%s",
        parsed.render_as_string(hide_password=True),
    )

    return create_engine(url, pool_pre_ping=True, future=True, connect_args=connect_args)


def check_connection(engine: Engine) -> None:
    """Ejecuta SELECT 1; propaga cualquier error del driver."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
