"""OpenTelemetry tracing, off unless ``OTEL_EXPORTER_TYPE`` names an exporter.

``console`` prints finished spans to stdout, which is handy locally. ``otlp``
ships them to a collector over gRPC and needs the ``otlp`` extra installed.
Either way every request gets a server span from the FastAPI
instrumentation, and :class:`TraceContextMiddleware` copies its ids into the
log context.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Any, Literal

from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from fastapi import FastAPI

_tracer_provider: TracerProvider | None = None


class TracingSettings(BaseSettings):
    """Standard ``OTEL_*`` variables plus ``OTEL_EXPORTER_TYPE``.

    >>> TracingSettings(exporter_type="console").is_enabled
    True
    """

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    service_name: str = Field(default="shelter-api", alias="OTEL_SERVICE_NAME")
    service_version: str = Field(default="unknown", alias="OTEL_SERVICE_VERSION")
    exporter_type: Literal["otlp", "console", "none"] = Field(
        default="none", alias="OTEL_EXPORTER_TYPE"
    )
    otlp_endpoint: str = Field(
        default="http://localhost:4317", alias="OTEL_EXPORTER_OTLP_ENDPOINT"
    )
    # key1=val1,key2=val2
    otlp_headers: str = Field(default="", alias="OTEL_EXPORTER_OTLP_HEADERS")

    @field_validator("exporter_type", mode="before")
    @classmethod
    def _lower(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    @property
    def is_enabled(self) -> bool:
        return self.exporter_type != "none"

    @property
    def otlp_headers_dict(self) -> dict[str, str]:
        pairs = (item.partition("=") for item in self.otlp_headers.split(","))
        return {key.strip(): value.strip() for key, sep, value in pairs if sep}


@lru_cache(maxsize=1)
def get_tracing_settings() -> TracingSettings:
    return TracingSettings()


def _otlp_exporter(settings: TracingSettings) -> SpanExporter:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # type: ignore[import-not-found]
            OTLPSpanExporter,
        )
    except ImportError as exc:
        msg = "OTEL_EXPORTER_TYPE=otlp needs the exporter: pip install 'shelter-api[otlp]'"
        raise ImportError(msg) from exc
    return OTLPSpanExporter(  # type: ignore[no-any-return]
        endpoint=settings.otlp_endpoint,
        headers=settings.otlp_headers_dict or None,
    )


def _create_exporter(settings: TracingSettings) -> SpanExporter:
    """Exporter for ``settings.exporter_type``.

    Raises:
        ImportError: ``otlp`` selected without the ``otlp`` extra.
        ValueError: Unknown exporter type.
    """
    if settings.exporter_type == "console":
        return ConsoleSpanExporter()
    if settings.exporter_type == "otlp":
        return _otlp_exporter(settings)
    msg = f"Unknown exporter type: {settings.exporter_type!r}"
    raise ValueError(msg)


def configure_tracing(app: FastAPI, settings: TracingSettings | None = None) -> None:
    """Install a global TracerProvider and instrument ``app``.

    Must run before the app starts serving: the instrumentation adds ASGI
    middleware. Does nothing when tracing is disabled.
    """
    global _tracer_provider

    settings = settings or get_tracing_settings()
    if not settings.is_enabled:
        return

    provider = TracerProvider(
        resource=Resource.create(
            {"service.name": settings.service_name, "service.version": settings.service_version}
        )
    )
    provider.add_span_processor(BatchSpanProcessor(_create_exporter(settings)))
    trace.set_tracer_provider(provider)
    _tracer_provider = provider
    FastAPIInstrumentor.instrument_app(app)


def shutdown_tracing() -> None:
    """Flush buffered spans. A no-op when tracing was never configured."""
    global _tracer_provider

    provider, _tracer_provider = _tracer_provider, None
    if provider is not None:
        provider.shutdown()
