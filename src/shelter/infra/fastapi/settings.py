"""HTTP-layer settings: OpenAPI metadata, CORS and the bind address."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import Annotated, Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Env values such as ``CORS_ALLOW_ORIGINS=http://a,http://b`` are split by the
# validator below instead of being JSON-decoded.
_HeaderList = Annotated[list[str], NoDecode]


class CORSSettings(BaseSettings):
    """``CORS_*`` variables. List values are comma-separated."""

    model_config = SettingsConfigDict(env_prefix="CORS_", extra="ignore")

    allow_origins: _HeaderList = Field(default=["*"])
    allow_methods: _HeaderList = Field(default=["*"])
    allow_headers: _HeaderList = Field(default=["*"])
    allow_credentials: bool = False
    # Browsers hide non-safelisted response headers from scripts unless exposed.
    expose_headers: _HeaderList = Field(default=["X-Request-ID", "Location"])

    @field_validator(
        "allow_origins", "allow_methods", "allow_headers", "expose_headers", mode="before"
    )
    @classmethod
    def _split(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @model_validator(mode="after")
    def _no_credentials_for_any_origin(self) -> CORSSettings:
        if self.allow_credentials and "*" in self.allow_origins:
            msg = "allow_credentials requires explicit allow_origins, not '*'"
            raise ValueError(msg)
        return self


def _installed_version() -> str:
    try:
        return version("shelter-api")
    except PackageNotFoundError:
        return "0.0.0"


class AppSettings(BaseSettings):
    """``APP_*`` variables for the FastAPI app and the uvicorn listener."""

    model_config = SettingsConfigDict(env_prefix="APP_", extra="ignore")

    title: str = "Shelter API"
    version: str = Field(default_factory=_installed_version)
    description: str = "Animal adoption records: CRUD and status transitions."
    docs_url: str | None = "/docs"
    redoc_url: str | None = "/redoc"
    openapi_url: str | None = "/openapi.json"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    cors: CORSSettings = Field(default_factory=CORSSettings)
