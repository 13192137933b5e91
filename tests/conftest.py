"""Shared fixtures: isolated settings, a controllable clock, and app clients."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from shelter.api.dependencies import get_clock
from shelter.app import create_shelter_app
from shelter.infra.fastapi.settings import AppSettings
from shelter.infra.observability.logging import _HANDLER_NAME, get_logging_settings
from shelter.infra.observability.tracing import TracingSettings, get_tracing_settings
from shelter.infra.persistence.database import get_database_manager

if TYPE_CHECKING:
    from collections.abc import Iterator

    from fastapi import FastAPI

# Fixed "now" used across tests: 2024-10-10 12:00 UTC.
FIXED_NOW = datetime(2024, 10, 10, 12, 0, tzinfo=UTC)


class FakeClock:
    """Settable clock returning timezone-aware UTC datetimes."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def _clear_caches() -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
    get_database_manager().dispose()
    get_database_manager.cache_clear()
    get_logging_settings.cache_clear()
    get_tracing_settings.cache_clear()


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point every test at a private in-memory SQLite database."""
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("OTEL_EXPORTER_TYPE", "none")
    monkeypatch.setenv("ENVIRONMENT", "test")
    _clear_caches()
    yield
    _clear_caches()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def shelter_app(clock: FakeClock) -> FastAPI:
    """Fresh application with the clock dependency overridden."""
    app = create_shelter_app(
        AppSettings(title="Shelter API (test)", version="0.0.0-test"),
        tracing_settings=TracingSettings(exporter_type="none"),
    )
    app.dependency_overrides[get_clock] = lambda: clock
    return app


@pytest.fixture()
def client(shelter_app: FastAPI) -> Iterator[TestClient]:
    """TestClient for the shelter app (lifespan hooks executed)."""
    with TestClient(shelter_app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture()
def bobby() -> dict[str, str]:
    """A valid create body."""
    return {
        "name": "Bobby",
        "description": "Small and friendly",
        "imageURL": "http://example.com/bobby.jpg",
        "category": "Dog",
        "birthDate": "2020-01-01",
        "status": "AVAILABLE",
    }
