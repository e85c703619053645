"""Transportes push del collector."""
