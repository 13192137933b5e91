"""Port interface for animal persistence.

The application layer depends only on this protocol; the relational
adapter lives in ``shelter.infra.persistence``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shelter.domain.animal import Animal


@runtime_checkable
class AnimalRepositoryPort(Protocol):
    """Storage contract for animal records.

    ``add`` assigns the identifier. ``save`` overwrites the full row of an
    existing record (last write wins). Lookups return ``None`` rather than
    raising; translating absence into ``NotFoundError`` is the caller's job.
    """

    def add(self, animal: Animal) -> Animal:
        """Insert a new record and return it with its assigned id."""
        ...

    def get(self, animal_id: int) -> Animal | None:
        """Return the record with ``animal_id``, or ``None``."""
        ...

    def save(self, animal: Animal) -> Animal | None:
        """Overwrite an existing record; ``None`` if it no longer exists."""
        ...

    def delete(self, animal_id: int) -> bool:
        """Remove a record; ``False`` if it did not exist."""
        ...

    def find_page(
        self,
        *,
        offset: int,
        limit: int,
        order_by: Sequence[tuple[str, bool]],
    ) -> tuple[list[Animal], int]:
        """Return one slice of records and the total number of records.

        Args:
            offset: Number of records to skip.
            limit: Maximum number of records to return.
            order_by: ``(attribute, descending)`` pairs, most significant first.
        """
        ...
