"""Endpoints de lectura: resumen del día y listados por tipo."""

from __future__ import annotations

from typing import Annotated, Any, Dict, List

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_reader
from ..infrastructure.persistence import MAX_PAGE_SIZE
from ..queries import AggregationReader
from ..schemas import DashboardSummary, EventKind

router = APIRouter(tags=["dashboard"])

PageLimit = Annotated[int, Query(ge=1, description="Se recorta a 100")]


@router.get("/api/dashboard", response_model=DashboardSummary)
def dashboard(reader: AggregationReader = Depends(get_reader)):
    return reader.dashboard_summary()


@router.get("/api/performance")
def list_performance(
    limit: PageLimit = MAX_PAGE_SIZE,
    reader: AggregationReader = Depends(get_reader),
) -> List[Dict[str, Any]]:
    return reader.list(EventKind.PERFORMANCE, limit)


@router.get("/api/seo")
def list_seo(
    limit: PageLimit = MAX_PAGE_SIZE,
    reader: AggregationReader = Depends(get_reader),
) -> List[Dict[str, Any]]:
    return reader.list(EventKind.SEO, limit)


@router.get("/api/forms")
def list_forms(
    limit: PageLimit = MAX_PAGE_SIZE,
    reader: AggregationReader = Depends(get_reader),
) -> List[Dict[str, Any]]:
    return reader.list(EventKind.FORM, limit)


@router.get("/api/users")
def list_users(
    limit: PageLimit = MAX_PAGE_SIZE,
    reader: AggregationReader = Depends(get_reader),
) -> List[Dict[str, Any]]:
    return reader.list(EventKind.USER, limit)
