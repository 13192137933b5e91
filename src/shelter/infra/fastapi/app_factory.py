"""Build a FastAPI app from routers, middleware and lifespan contributions.

:func:`create_app` carries no shelter-specific wiring; ``shelter.app``
decides what goes in.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from shelter.infra.fastapi.error_handlers import register_exception_handlers
from shelter.infra.fastapi.lifespan import compose_lifespan
from shelter.infra.fastapi.settings import AppSettings

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fastapi import APIRouter

    from shelter.application.contributions import (
        LifespanContribution,
        MiddlewareContribution,
    )

logger = logging.getLogger(__name__)


def create_app(
    settings: AppSettings | None = None,
    *,
    extra_routers: Sequence[APIRouter] = (),
    extra_middleware: Sequence[MiddlewareContribution] = (),
    extra_lifespan_hooks: Sequence[LifespanContribution] = (),
) -> FastAPI:
    """Assemble the application.

    The lowest middleware ``priority`` ends up outermost. CORS wraps all of
    them so preflight requests and error responses get CORS headers too.
    Problem handlers are always registered.
    """
    settings = settings or AppSettings()

    app = FastAPI(
        title=settings.title,
        version=settings.version,
        description=settings.description,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        debug=settings.debug,
        lifespan=compose_lifespan(list(extra_lifespan_hooks)),
    )

    # add_middleware prepends, so the outermost one must be added last.
    for contribution in sorted(extra_middleware, key=lambda m: m.priority, reverse=True):
        app.add_middleware(contribution.middleware_class, **contribution.kwargs)
        logger.debug(
            "middleware_registered name=%s priority=%d",
            contribution.middleware_class.__name__,
            contribution.priority,
        )

    cors = settings.cors
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors.allow_origins,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
        allow_credentials=cors.allow_credentials,
        expose_headers=cors.expose_headers,
    )

    register_exception_handlers(app)

    for router in extra_routers:
        app.include_router(router)

    return app
