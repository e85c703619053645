"""Errores del collector.

Cada error lleva el status HTTP con el que se responde en el borde
(ver ``main.register_error_handlers``). Ningún error se reintenta: un
evento cuya escritura falla se pierde.
"""

from __future__ import annotations


class AnalyticsError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthorized(AnalyticsError):
    """API key ausente o fuera del allowlist."""

    status_code = 401


class InvalidRequest(AnalyticsError):
    """Tipo de evento desconocido o envelope inutilizable."""

    status_code = 400


class SchemaMismatch(AnalyticsError):
    """Payload con forma incompatible con la tabla destino."""

    status_code = 400


class StorageWriteFailed(AnalyticsError):
    status_code = 500


class AggregationUnavailable(AnalyticsError):
    status_code = 500


class StoreUnavailable(AnalyticsError):
    """El store no pudo abrirse; el proceso no debe servir tráfico.

    Solo se lanza en el arranque (lifespan): aborta el proceso y nunca
    llega al handler HTTP, por eso no define status propio.
    """
