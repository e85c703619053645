"""Esquema del event store: cuatro tablas append-only sin FKs entre sí."""

from __future__ import annotations

from typing import Dict

from sqlalchemy import Column, DateTime, Float, Integer, MetaData, Table, Text

from ...schemas import EventKind

metadata = MetaData()


def _id() -> Column:
    return Column("id", Integer, primary_key=True, autoincrement=True)


def _timestamp() -> Column:
    # Asignado por EventStore al insertar (UTC naive), nunca por el cliente.
    return Column("timestamp", DateTime, nullable=False, index=True)


performance_metrics = Table(
    "performance_metrics",
    metadata,
    _id(),
    Column("page_url", Text),
    Column("load_time", Float),
    Column("fcp", Float),
    Column("lcp", Float),
    Column("cls", Float),
    Column("fid", Float),
    Column("ttfb", Float),
    Column("dom_ready", Float),
    Column("device_type", Text),
    _timestamp(),
)

seo_metrics = Table(
    "seo_metrics",
    metadata,
    _id(),
    Column("page_url", Text),
    Column("title", Text),
    Column("meta_description", Text),
    Column("h1_count", Integer),
    Column("lighthouse_score", Float),
    Column("images_without_alt", Integer),
    Column("internal_links", Integer),
    Column("external_links", Integer),
    _timestamp(),
)

form_submissions = Table(
    "form_submissions",
    metadata,
    _id(),
    Column("form_type", Text),
    Column("page_url", Text),
    Column("referrer", Text),
    Column("device_type", Text),
    Column("conversion_source", Text),
    _timestamp(),
)

user_analytics = Table(
    "user_analytics",
    metadata,
    _id(),
    Column("session_id", Text),
    Column("page_url", Text),
    Column("referrer", Text),
    Column("device_type", Text),
    Column("screen_resolution", Text),
    Column("user_agent", Text),
    Column("time_on_page", Float),
    _timestamp(),
)

TABLES: Dict[EventKind, Table] = {
    EventKind.PERFORMANCE: performance_metrics,
    EventKind.SEO: seo_metrics,
    EventKind.FORM: form_submissions,
    EventKind.USER: user_analytics,
}
