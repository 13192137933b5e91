"""Read projection of an animal record.

The view exposes every stored field, including ``id``, plus an ``age``
computed at read time. Nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date, datetime

    from shelter.domain.animal import Animal, AnimalStatus


@dataclass(frozen=True, slots=True)
class AnimalView:
    """Read-shaped animal with the computed ``age`` in whole years."""

    id: int
    name: str
    description: str | None
    image_url: str | None
    category: str
    birth_date: date
    status: AnimalStatus
    age: int
    created_at: datetime
    updated_at: datetime


def compute_age(birth_date: date, today: date) -> int:
    """Whole years elapsed from ``birth_date`` to ``today`` (floor).

    A 29 February birthday is reached on 1 March in non-leap years.

    Example:
        >>> from datetime import date
        >>> compute_age(date(2020, 1, 1), date(2024, 10, 10))
        4
    """
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return max(years, 0)


def to_view(animal: Animal, today: date) -> AnimalView:
    """Project a stored animal into its read view.

    Raises:
        ValueError: If the animal has not been persisted yet.
    """
    if animal.id is None:
        msg = "Cannot build a view of an unsaved animal"
        raise ValueError(msg)
    return AnimalView(
        id=animal.id,
        name=animal.name,
        description=animal.description,
        image_url=animal.image_url,
        category=animal.category,
        birth_date=animal.birth_date,
        status=animal.status,
        age=compute_age(animal.birth_date, today),
        created_at=animal.created_at,
        updated_at=animal.updated_at,
    )
