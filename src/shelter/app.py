"""Shelter application factory.

Wires the animals router and the health endpoint together with the
framework contributions (request-id and trace middleware, observability
and persistence lifespan hooks).

Usage::

    from shelter.app import create_shelter_app

    app = create_shelter_app()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shelter.api import router as animals_router
from shelter.infra.fastapi import create_app, health_router, request_id_contribution
from shelter.infra.observability import (
    configure_tracing,
    middleware_contribution as trace_contribution,
)
from shelter.infra.observability import lifespan_contribution as observability_lifespan
from shelter.infra.persistence import lifespan_contribution as persistence_lifespan

if TYPE_CHECKING:
    from fastapi import FastAPI

    from shelter.infra.fastapi.settings import AppSettings
    from shelter.infra.observability.tracing import TracingSettings


def create_shelter_app(
    settings: AppSettings | None = None,
    *,
    tracing_settings: TracingSettings | None = None,
) -> FastAPI:
    """Create the shelter API application.

    Args:
        settings: Application settings. If ``None``, loaded from environment.
        tracing_settings: Tracing settings. If ``None``, loaded from environment.
    """
    app = create_app(
        settings,
        extra_routers=[animals_router, health_router],
        extra_middleware=[request_id_contribution, trace_contribution],
        extra_lifespan_hooks=[observability_lifespan, persistence_lifespan],
    )
    configure_tracing(app, tracing_settings)
    return app
