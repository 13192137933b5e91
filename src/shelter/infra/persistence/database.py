"""Engine and session factory for the relational store.

PostgreSQL through psycopg is the default target, assembled from the
``DATABASE_*`` parts. ``DATABASE_URL`` replaces the whole thing with any
SQLAlchemy URL; the tests use ``sqlite://``.

    with get_database_manager().get_session_factory()() as session:
        ...
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import URL, Engine, create_engine, make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


class DatabaseSettings(BaseSettings):
    """``DATABASE_*`` variables.

    >>> DatabaseSettings(url="sqlite://").is_sqlite
    True
    """

    model_config = SettingsConfigDict(env_prefix="DATABASE_", extra="ignore")

    url: str | None = Field(default=None, repr=False)
    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: SecretStr = SecretStr("postgres")
    name: str = "shelter"

    # Pool options; ignored for SQLite.
    pool_size: int = Field(default=5, ge=1, le=100)
    max_overflow: int = Field(default=5, ge=0, le=100)
    pool_timeout: int = Field(default=30, ge=1, le=300)
    pool_recycle: int = Field(default=3600, ge=60, le=86400)

    echo: bool = False
    create_tables: bool = True

    @model_validator(mode="after")
    def _url_parses(self) -> DatabaseSettings:
        try:
            make_url(self.database_url)
        except ArgumentError as exc:
            msg = f"Invalid database connection URL: {exc}"
            raise ValueError(msg) from exc
        return self

    @property
    def database_url(self) -> str:
        if self.url:
            return self.url
        return URL.create(
            "postgresql+psycopg",
            username=self.user,
            password=self.password.get_secret_value(),
            host=self.host,
            port=self.port,
            database=self.name,
        ).render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.database_url).get_backend_name() == "sqlite"


class DatabaseManager:
    """Lazily built engine plus a session factory bound to it.

    For SQLite every session shares one connection, so an in-memory
    database is visible from all threads for the life of the engine.
    """

    def __init__(self, settings: DatabaseSettings) -> None:
        self._settings = settings
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def settings(self) -> DatabaseSettings:
        return self._settings

    def _engine_options(self) -> dict[str, Any]:
        s = self._settings
        if s.is_sqlite:
            return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
        return {
            "pool_pre_ping": True,
            "pool_size": s.pool_size,
            "max_overflow": s.max_overflow,
            "pool_timeout": s.pool_timeout,
            "pool_recycle": s.pool_recycle,
        }

    def get_engine(self) -> Engine:
        if self._engine is None:
            self._engine = create_engine(
                self._settings.database_url, echo=self._settings.echo, **self._engine_options()
            )
        return self._engine

    def get_session_factory(self) -> sessionmaker[Session]:
        if self._session_factory is None:
            # Repository results are read after commit, outside the session.
            self._session_factory = sessionmaker(
                self.get_engine(), expire_on_commit=False, autoflush=False
            )
        return self._session_factory

    def dispose(self) -> None:
        """Close pooled connections; the next ``get_engine`` builds a new engine."""
        engine, self._engine, self._session_factory = self._engine, None, None
        if engine is not None:
            engine.dispose()


@lru_cache(maxsize=1)
def get_database_manager() -> DatabaseManager:
    """Process-wide manager; ``cache_clear()`` it after changing the environment."""
    return DatabaseManager(DatabaseSettings())
