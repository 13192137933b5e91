"""``GET /healthz``: readiness of the service and its database."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from shelter.infra.persistence.database import get_database_manager

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


def _check_database() -> dict[str, str]:
    # Only "ok"/"error" leaves the process; the driver message may carry the DSN.
    try:
        with get_database_manager().get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("health_check_failed", extra={"check": "database"}, exc_info=True)
        return {"status": "error"}
    return {"status": "ok"}


@router.get("/healthz")
def healthz() -> JSONResponse:
    """200 ``ok`` when every check passes, otherwise 503 ``degraded``."""
    checks = {"database": _check_database()}
    healthy = all(check["status"] == "ok" for check in checks.values())
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "ok" if healthy else "degraded", "checks": checks},
    )
