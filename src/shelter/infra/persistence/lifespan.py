"""Database startup check, table creation and engine teardown."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import text

from shelter.application.contributions import (
    LIFESPAN_PRIORITY_PERSISTENCE,
    LifespanContribution,
)
from shelter.infra.persistence.database import get_database_manager
from shelter.infra.persistence.models import Base

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _persistence_lifespan(app: Any) -> AsyncIterator[None]:
    """Refuse to start without a reachable database.

    The ``animals`` table is created if missing unless
    ``DATABASE_CREATE_TABLES=false``. The engine is disposed on shutdown.
    """
    manager = get_database_manager()
    engine = manager.get_engine()

    with engine.begin() as conn:
        conn.execute(text("SELECT 1"))
        if manager.settings.create_tables:
            Base.metadata.create_all(conn)
    logger.info(
        "database_ready",
        extra={"backend": engine.dialect.name, "create_tables": manager.settings.create_tables},
    )

    try:
        yield
    finally:
        manager.dispose()
        logger.info("database_disposed")


lifespan_contribution = LifespanContribution(
    hook=_persistence_lifespan,
    priority=LIFESPAN_PRIORITY_PERSISTENCE,
)
