"""Lecturas agregadas para el dashboard.

Cada sub-consulta observa el store de forma independiente: los números
del resumen no forman un snapshot atómico bajo escrituras concurrentes.
Si cualquier sub-consulta falla, falla el resumen completo.
"""

from __future__ import annotations

import logging
from datetime import timezone
from typing import Any, Dict, List

from ..infrastructure.persistence import MAX_PAGE_SIZE, EventStore
from ..schemas import (
    DashboardStats,
    DashboardSummary,
    EventKind,
    FormStats,
    PerformanceStats,
    UserStats,
)

logger = logging.getLogger(__name__)


class AggregationReader:
    def __init__(self, store: EventStore):
        self._store = store

    def dashboard_summary(self) -> DashboardSummary:
        # Una sola lectura del reloj del store: el timestamp y el "hoy"
        # de las tres tablas salen del mismo instante.
        now = self._store.now().replace(tzinfo=timezone.utc)
        day = now.astimezone().date()

        perf_total = self._store.aggregate(EventKind.PERFORMANCE, "count", day)
        avg_load = self._store.aggregate(EventKind.PERFORMANCE, "avg:load_time", day)
        form_total = self._store.aggregate(EventKind.FORM, "count", day)
        unique_sessions = self._store.aggregate(EventKind.USER, "count_distinct:session_id", day)

        logger.debug(
            "[Dashboard] day=%s perf=%s avg_load=%s forms=%s sessions=%s",
            day, perf_total, avg_load, form_total, unique_sessions,
        )

        return DashboardSummary(
            timestamp=now,
            stats=DashboardStats(
                performance=PerformanceStats(
                    total=int(perf_total or 0),
                    avg_load_time=float(avg_load) if avg_load is not None else None,
                ),
                forms=FormStats(total=int(form_total or 0)),
                users=UserStats(unique_sessions=int(unique_sessions or 0)),
            ),
        )

    def list(self, kind: EventKind, limit: int = MAX_PAGE_SIZE) -> List[Dict[str, Any]]:
        """Filas más recientes primero; nunca más de 100."""
        return self._store.query(kind, order="desc", limit=min(limit, MAX_PAGE_SIZE))
