"""Status transition service.

The only path that changes ``status`` without touching any other client
field. No transition guards: AVAILABLE and ADOPTED may follow each other in
either direction, and repeating the current status is an accepted write.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shelter.domain.animal import AnimalStatus

if TYPE_CHECKING:
    from shelter.application.store import AnimalStore
    from shelter.domain.animal import Animal

logger = logging.getLogger(__name__)


class StatusTransitionService:
    """Applies status changes to stored animals.

    Args:
        store: Record store used for lookup and persistence.
    """

    def __init__(self, store: AnimalStore) -> None:
        self._store = store

    def update_status(self, animal_id: int, new_status: AnimalStatus | str) -> Animal:
        """Set the status of an existing animal and persist it.

        Args:
            animal_id: Identifier of the animal.
            new_status: Target status, as enum member or token.

        Returns:
            The updated record.

        Raises:
            NotFoundError: If no such record exists (nothing is written).
            ValueError: If ``new_status`` is not a valid status token.
        """
        status = AnimalStatus.parse(new_status)
        animal = self._store.get(animal_id)
        previous = animal.status
        updated = self._store.save(animal.with_changes(status=status))
        logger.info(
            "animal_status_changed",
            extra={"animal_id": animal_id, "from_status": previous, "to_status": status},
        )
        return updated
