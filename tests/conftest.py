"""Fixtures compartidas: settings con SQLite temporal, app y TestClient."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from common.config import Settings
from collector_api.infrastructure.persistence import EventStore
from collector_api.main import create_app

TEST_KEY = "test-key"


class FakeClock:
    """Reloj controlable; avanza ``step`` en cada lectura."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


def local_noon(day: date) -> datetime:
    """Mediodía local de ``day`` como datetime aware en UTC."""
    return datetime.combine(day, time(12, 0)).astimezone().astimezone(timezone.utc)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        db_url=f"sqlite:///{tmp_path / 'analytics.db'}",
        api_keys=frozenset({TEST_KEY, "second-key"}),
        primary_api_key=TEST_KEY,
        public_url="https://analytics.example.test",
    )


@pytest.fixture
def client(settings) -> Iterator[TestClient]:
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def notify_client(settings) -> Iterator[TestClient]:
    with TestClient(create_app(replace(settings, notify_on_ingest=True))) as c:
        yield c


@pytest.fixture
def app_store(client) -> EventStore:
    return client.app.state.store


@pytest.fixture
def auth_headers() -> dict:
    return {"X-API-Key": TEST_KEY}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(local_noon(date.today()))


@pytest.fixture
def store(tmp_path, clock) -> Iterator[EventStore]:
    s = EventStore.open(f"sqlite:///{tmp_path / 'store.db'}", clock=clock)
    yield s
    s.close()
