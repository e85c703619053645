"""Infraestructura del collector (persistencia)."""
