"""Ingesta de eventos de tracking."""

from .dispatch import decode_event, ingest_event

__all__ = ["decode_event", "ingest_event"]
