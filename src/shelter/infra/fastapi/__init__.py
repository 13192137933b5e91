"""Shelter Infra FastAPI -- error handlers, middleware, lifespan, app factory."""

from shelter.infra.fastapi._health import router as health_router
from shelter.infra.fastapi.app_factory import create_app
from shelter.infra.fastapi.error_handlers import (
    PROBLEM_MEDIA_TYPE,
    ProblemDetail,
    register_exception_handlers,
)
from shelter.infra.fastapi.lifespan import compose_lifespan
from shelter.infra.fastapi.middleware.request_id import (
    RequestIdMiddleware,
    get_request_id,
)
from shelter.infra.fastapi.middleware.request_id import (
    contribution as request_id_contribution,
)
from shelter.infra.fastapi.settings import AppSettings, CORSSettings

__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "AppSettings",
    "CORSSettings",
    "ProblemDetail",
    "RequestIdMiddleware",
    "compose_lifespan",
    "create_app",
    "get_request_id",
    "health_router",
    "register_exception_handlers",
    "request_id_contribution",
]
