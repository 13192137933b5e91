"""FastAPI dependencies for the animals API.

Tests replace :func:`get_clock` (or any of these) through
``app.dependency_overrides``.
"""

# NOTE: Do NOT use ``from __future__ import annotations`` here.
# FastAPI resolves ``Depends`` parameters from runtime annotations.

from collections.abc import Callable
from datetime import datetime
from typing import Annotated

from fastapi import Depends

from shelter.application.status import StatusTransitionService
from shelter.application.store import AnimalStore, utc_now
from shelter.infra.persistence.animal_repository import SqlAlchemyAnimalRepository
from shelter.infra.persistence.database import get_database_manager


def get_clock() -> Callable[[], datetime]:
    """Clock used for timestamps and the current date."""
    return utc_now


def get_store(
    clock: Annotated[Callable[[], datetime], Depends(get_clock)],
) -> AnimalStore:
    session_factory = get_database_manager().get_session_factory()
    return AnimalStore(SqlAlchemyAnimalRepository(session_factory), clock=clock)


def get_status_service(
    store: Annotated[AnimalStore, Depends(get_store)],
) -> StatusTransitionService:
    return StatusTransitionService(store)


StoreDep = Annotated[AnimalStore, Depends(get_store)]
StatusServiceDep = Annotated[StatusTransitionService, Depends(get_status_service)]
