"""Animal record and its write input.

``Animal`` is the stored record. ``AnimalData`` is the client-writable subset
as decoded from a request, with every field optional so that validation can
report all missing values at once.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import date, datetime


class AnimalStatus(StrEnum):
    """Adoption status.

    Two states, no intermediate ones. Any transition between them is legal.
    Uses StrEnum for native JSON serialization.
    """

    AVAILABLE = "AVAILABLE"
    ADOPTED = "ADOPTED"

    @classmethod
    def parse(cls, value: str | AnimalStatus) -> AnimalStatus:
        """Decode a status token.

        Raises:
            ValueError: If the token is not an enum member.
        """
        if isinstance(value, cls):
            return value
        return cls(value)


@dataclass(frozen=True, slots=True)
class AnimalData:
    """Client-writable animal fields, prior to validation."""

    name: str | None = None
    description: str | None = None
    image_url: str | None = None
    category: str | None = None
    birth_date: date | None = None
    status: AnimalStatus | str | None = None

    def merged_over(self, animal: Animal, provided: set[str]) -> AnimalData:
        """Overlay the ``provided`` fields of this input onto a stored record.

        Fields absent from ``provided`` keep the record's current value.
        """
        current = {f.name: getattr(animal, f.name) for f in fields(AnimalData)}
        overrides = {name: getattr(self, name) for name in provided if name in current}
        return AnimalData(**{**current, **overrides})


@dataclass(frozen=True, slots=True)
class Animal:
    """A stored animal-adoption record.

    ``id`` is ``None`` only before the record is first persisted.
    """

    name: str
    category: str
    birth_date: date
    status: AnimalStatus
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    image_url: str | None = None
    id: int | None = None

    def with_changes(self, **changes: Any) -> Animal:
        return replace(self, **changes)
