"""Shelter Infra Observability -- structlog logging and OpenTelemetry tracing."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from shelter.application.contributions import (
    LIFESPAN_PRIORITY_OBSERVABILITY,
    LifespanContribution,
)
from shelter.infra.observability.logging import (
    LoggingSettings,
    configure_logging,
    get_logger,
)
from shelter.infra.observability.middleware import TraceContextMiddleware
from shelter.infra.observability.middleware import contribution as middleware_contribution
from shelter.infra.observability.tracing import (
    TracingSettings,
    configure_tracing,
    shutdown_tracing,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@asynccontextmanager
async def _observability_lifespan(app: Any) -> AsyncIterator[None]:
    """Configure logging on startup; flush tracing on shutdown.

    Tracing is configured at build time instead: its instrumentation adds
    middleware, which Starlette rejects once the app has started.
    """
    configure_logging()
    try:
        yield
    finally:
        shutdown_tracing()


lifespan_contribution = LifespanContribution(
    hook=_observability_lifespan,
    priority=LIFESPAN_PRIORITY_OBSERVABILITY,
)

__all__ = [
    "LoggingSettings",
    "TraceContextMiddleware",
    "TracingSettings",
    "configure_logging",
    "configure_tracing",
    "get_logger",
    "lifespan_contribution",
    "middleware_contribution",
    "shutdown_tracing",
]
