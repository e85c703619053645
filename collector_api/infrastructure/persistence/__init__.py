"""Persistence infrastructure for the analytics event store."""

from .event_store import MAX_PAGE_SIZE, EventStore, local_day_bounds
from .tables import TABLES, metadata

__all__ = [
    "EventStore",
    "MAX_PAGE_SIZE",
    "TABLES",
    "local_day_bounds",
    "metadata",
]
