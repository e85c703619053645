"""Consultas de lectura (dashboard y listados)."""

from .dashboard import AggregationReader

__all__ = ["AggregationReader"]
