"""Put the active OpenTelemetry ids on every log line of a request."""

from __future__ import annotations

from typing import Any

import structlog
from opentelemetry import trace

from shelter.application.contributions import MiddlewareContribution


class TraceContextMiddleware:
    """Bind ``trace_id``/``span_id`` (hex) for the duration of a request.

    Does nothing when no span is recording, e.g. with tracing disabled.
    """

    def __init__(self, app: Any) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        span = trace.get_current_span()
        if scope["type"] not in ("http", "websocket") or not span.is_recording():
            await self.app(scope, receive, send)
            return

        ctx = span.get_span_context()
        structlog.contextvars.bind_contextvars(
            trace_id=trace.format_trace_id(ctx.trace_id),
            span_id=trace.format_span_id(ctx.span_id),
        )
        try:
            await self.app(scope, receive, send)
        finally:
            structlog.contextvars.unbind_contextvars("trace_id", "span_id")


# Inside the FastAPI instrumentation span, outside the request-id middleware.
contribution = MiddlewareContribution(middleware_class=TraceContextMiddleware, priority=5)
