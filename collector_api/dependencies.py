"""Dependencias FastAPI: acceso a los handles que posee la aplicación."""

from __future__ import annotations

from fastapi import Depends, Request

from common.config import Settings
from .infrastructure.persistence import EventStore
from .queries import AggregationReader
from .transports.websocket import NotificationHub


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> EventStore:
    return request.app.state.store


def get_hub(request: Request) -> NotificationHub:
    return request.app.state.hub


def get_reader(store: EventStore = Depends(get_store)) -> AggregationReader:
    return AggregationReader(store)
