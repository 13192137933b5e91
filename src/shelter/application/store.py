"""Record store for animals: validated CRUD over the repository port.

The store owns the write-side guarantees: validation before every write,
identifier and timestamp assignment on create, ``created_at`` preservation
and ``updated_at`` refresh on update. A failed validation raises before the
repository is touched, so no partial state is ever written.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from shelter.application.paging import Page, PageRequest
from shelter.domain.animal import Animal, AnimalData, AnimalStatus
from shelter.domain.exceptions import NotFoundError
from shelter.domain.validation import ensure_valid

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from shelter.domain.ports import AnimalRepositoryPort

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "Animal"


def utc_now() -> datetime:
    """Default clock: timezone-aware current UTC time."""
    return datetime.now(UTC)


class AnimalStore:
    """Validated create/read/update/delete for animal records.

    Args:
        repository: Persistence adapter implementing ``AnimalRepositoryPort``.
        clock: Callable returning the current UTC datetime. Injected for tests.
    """

    def __init__(
        self,
        repository: AnimalRepositoryPort,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def today(self) -> date:
        """Current calendar date (UTC) as seen by this store."""
        return self._clock().date()

    # -- Reads --

    def get(self, animal_id: int) -> Animal:
        """Return the animal with ``animal_id``.

        Raises:
            NotFoundError: If no such record exists.
        """
        animal = self._repository.get(animal_id)
        if animal is None:
            raise NotFoundError(RESOURCE_TYPE, animal_id)
        return animal

    def list(self, request: PageRequest) -> Page[Animal]:
        """Return one page of animals, ordered by ``request.order_by``."""
        items, total = self._repository.find_page(
            offset=request.offset,
            limit=request.size,
            order_by=request.order_by,
        )
        return Page(items=items, number=request.page, size=request.size, total_elements=total)

    # -- Writes --

    def create(self, data: AnimalData) -> Animal:
        """Validate and persist a new animal.

        Raises:
            ValidationError: If any field constraint is violated.
        """
        now = self._clock()
        ensure_valid(data, now.date())
        animal = self._repository.add(_build(data, created_at=now, updated_at=now))
        logger.info("animal_created", extra={"animal_id": animal.id})
        return animal

    def update(self, animal_id: int, data: AnimalData) -> Animal:
        """Replace every client field of an existing animal.

        Raises:
            NotFoundError: If no such record exists.
            ValidationError: If any field constraint is violated.
        """
        existing = self.get(animal_id)
        return self._replace(existing, data)

    def patch(self, animal_id: int, data: AnimalData, provided: set[str]) -> Animal:
        """Merge the ``provided`` fields of ``data`` over an existing animal.

        The merged result is validated as a whole before being written.

        Raises:
            NotFoundError: If no such record exists.
            ValidationError: If the merged record violates a constraint.
        """
        existing = self.get(animal_id)
        return self._replace(existing, data.merged_over(existing, provided))

    def delete(self, animal_id: int) -> None:
        """Hard-delete an animal.

        Raises:
            NotFoundError: If no such record exists.
        """
        if not self._repository.delete(animal_id):
            raise NotFoundError(RESOURCE_TYPE, animal_id)
        logger.info("animal_deleted", extra={"animal_id": animal_id})

    def save(self, animal: Animal) -> Animal:
        """Persist an already-valid record with a refreshed ``updated_at``.

        Used by services that change a single field without going through
        field validation.

        Raises:
            NotFoundError: If the record vanished concurrently.
        """
        if animal.id is None:
            msg = "Cannot save an animal that has not been created"
            raise ValueError(msg)
        saved = self._repository.save(animal.with_changes(updated_at=self._clock()))
        if saved is None:
            raise NotFoundError(RESOURCE_TYPE, animal.id)
        return saved

    def _replace(self, existing: Animal, data: AnimalData) -> Animal:
        now = self._clock()
        ensure_valid(data, now.date())
        replacement = _build(data, created_at=existing.created_at, updated_at=now)
        saved = self._repository.save(replacement.with_changes(id=existing.id))
        if saved is None:
            raise NotFoundError(RESOURCE_TYPE, existing.id)  # type: ignore[arg-type]
        logger.info("animal_updated", extra={"animal_id": saved.id})
        return saved


def _build(data: AnimalData, *, created_at: datetime, updated_at: datetime) -> Animal:
    """Build a record from validated input."""
    assert data.name is not None and data.category is not None
    assert data.birth_date is not None and data.status is not None
    return Animal(
        name=data.name,
        description=data.description,
        image_url=data.image_url,
        category=data.category,
        birth_date=data.birth_date,
        status=AnimalStatus.parse(data.status),
        created_at=created_at,
        updated_at=updated_at,
    )
