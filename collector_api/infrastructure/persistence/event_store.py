"""EventStore - almacenamiento append-only de eventos de analytics.

El store es un handle explícito: la aplicación lo abre en el arranque,
lo inyecta en endpoints/reader y lo cierra en el shutdown. No hay
singleton a nivel de módulo.

La serialización de escrituras concurrentes es responsabilidad de la
base de datos; este módulo no implementa locking propio.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import distinct, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from common.db import build_engine, check_connection
from ...errors import AggregationUnavailable, SchemaMismatch, StorageWriteFailed, StoreUnavailable
from ...schemas import EventKind
from .tables import TABLES, metadata

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def local_day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Rango [inicio, fin) en UTC naive del día calendario local ``day``."""
    start_local = datetime.combine(day, time.min).astimezone()
    end_local = datetime.combine(day + timedelta(days=1), time.min).astimezone()
    return (
        start_local.astimezone(timezone.utc).replace(tzinfo=None),
        end_local.astimezone(timezone.utc).replace(tzinfo=None),
    )


class EventStore:
    """Store de los cuatro tipos de evento sobre SQLAlchemy Core."""

    def __init__(self, engine: Engine, clock: Optional[Clock] = None):
        self._engine = engine
        self._clock = clock or utc_now
        self._closed = False

    @classmethod
    def open(cls, url: str, clock: Optional[Clock] = None) -> "EventStore":
        """Abre el store, crea las tablas si faltan y verifica conectividad.

        Raises:
            StoreUnavailable: si la base no es accesible. El proceso no
                debe servir tráfico en ese caso.
        """
        try:
            engine = build_engine(url)
            metadata.create_all(engine)
            check_connection(engine)
        except SQLAlchemyError as e:
            logger.exception("[DB] No se pudo abrir el event store")
            raise StoreUnavailable(f"Event store unavailable: {type(e).__name__}") from e

        logger.info("[DB] Event store listo tables=%s", ", ".join(t.name for t in TABLES.values()))
        return cls(engine, clock=clock)

    @property
    def engine(self) -> Engine:
        return self._engine

    def now(self) -> datetime:
        """Timestamp de servidor en UTC naive (formato de almacenamiento)."""
        return self._clock().astimezone(timezone.utc).replace(tzinfo=None)

    def today(self) -> date:
        """Día calendario actual en hora local del servidor."""
        return self._clock().astimezone().date()

    def insert(self, kind: EventKind, fields: Mapping[str, Any]) -> int:
        """Inserta una fila y la confirma antes de retornar.

        Returns:
            id autoincremental de la fila

        Raises:
            SchemaMismatch: si ``fields`` trae columnas que la tabla no tiene
            StorageWriteFailed: si la escritura falla; el evento se pierde
        """
        table = TABLES[kind]
        bad = (set(fields) - set(table.c.keys())) | ({"id", "timestamp"} & set(fields))
        if bad:
            raise SchemaMismatch(f"Unknown or reserved columns for {kind.value}: {', '.join(sorted(bad))}")

        values = dict(fields)
        values["timestamp"] = self.now()

        try:
            with self._engine.begin() as conn:
                result = conn.execute(table.insert().values(**values))
                row_id = int(result.inserted_primary_key[0])
        except SQLAlchemyError as e:
            logger.exception("[DB] Insert falló table=%s err=%s", table.name, type(e).__name__)
            raise StorageWriteFailed(f"DB error: {type(e).__name__}") from e

        logger.debug("[DB] Insert OK table=%s id=%d", table.name, row_id)
        return row_id

    def query(self, kind: EventKind, order: str = "desc", limit: int = MAX_PAGE_SIZE) -> List[Dict[str, Any]]:
        """Filas más recientes primero (timestamp, luego id), máximo 100."""
        table = TABLES[kind]
        limit = max(0, min(int(limit), MAX_PAGE_SIZE))

        if order == "desc":
            ordering = (table.c.timestamp.desc(), table.c.id.desc())
        elif order == "asc":
            ordering = (table.c.timestamp.asc(), table.c.id.asc())
        else:
            raise ValueError(f"order must be 'asc' or 'desc', got {order!r}")

        stmt = select(table).order_by(*ordering).limit(limit)
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError as e:
            logger.exception("[DB] Query falló table=%s err=%s", table.name, type(e).__name__)
            raise AggregationUnavailable(f"DB error: {type(e).__name__}") from e

        return [dict(r) for r in rows]

    def aggregate(self, kind: EventKind, spec: str, day: Optional[date] = None) -> Any:
        """Agregado escalar sobre las filas de ``day`` (por defecto hoy).

        ``spec`` admite: ``count``, ``avg:<columna>``, ``count_distinct:<columna>``.
        """
        table = TABLES[kind]
        op, _, column_name = spec.partition(":")

        if op == "count" and not column_name:
            expr = func.count()
        else:
            if column_name not in table.c:
                raise SchemaMismatch(f"Unknown column for {kind.value}: {column_name!r}")
            column = table.c[column_name]
            if op == "avg":
                expr = func.avg(column)
            elif op == "count_distinct":
                expr = func.count(distinct(column))
            else:
                raise ValueError(f"Unsupported aggregate spec: {spec!r}")

        start, end = local_day_bounds(day or self.today())
        stmt = (
            select(expr)
            .select_from(table)
            .where(table.c.timestamp >= start, table.c.timestamp < end)
        )
        try:
            with self._engine.connect() as conn:
                return conn.execute(stmt).scalar()
        except SQLAlchemyError as e:
            logger.exception("[DB] Aggregate falló table=%s spec=%s err=%s", table.name, spec, type(e).__name__)
            raise AggregationUnavailable(f"DB error: {type(e).__name__}") from e

    def count(self, kind: EventKind) -> int:
        table = TABLES[kind]
        try:
            with self._engine.connect() as conn:
                return int(conn.execute(select(func.count()).select_from(table)).scalar_one())
        except SQLAlchemyError as e:
            logger.exception("[DB] Count falló table=%s", table.name)
            raise AggregationUnavailable(f"DB error: {type(e).__name__}") from e

    def ping(self) -> bool:
        try:
            check_connection(self._engine)
            return True
        except SQLAlchemyError:
            logger.warning("[DB] Ping falló", exc_info=True)
            return False

    def close(self) -> None:
        if self._closed:
            return
        self._engine.dispose()
        self._closed = True
        logger.info("[DB] Event store cerrado")
