"""Relational repository for animal records.

Implements ``AnimalRepositoryPort`` on top of SQLAlchemy. Each call opens
its own short-lived session and commits before returning, so every write is
a single atomic row operation. Concurrent writes to the same row are
last-write-wins; there is no version column.
"""

from __future__ import annotations

from datetime import UTC
from typing import TYPE_CHECKING

from sqlalchemy import asc, delete, desc, func, select

from shelter.domain.animal import Animal
from shelter.infra.persistence.models import AnimalRow

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime

    from sqlalchemy.orm import Session

_SORTABLE_COLUMNS = {
    "id": AnimalRow.id,
    "name": AnimalRow.name,
    "category": AnimalRow.category,
    "birth_date": AnimalRow.birth_date,
    "status": AnimalRow.status,
    "created_at": AnimalRow.created_at,
    "updated_at": AnimalRow.updated_at,
}

# Range of the 32-bit INTEGER primary key; ids outside it cannot be stored.
_MIN_ID = -(2**31)
_MAX_ID = 2**31 - 1


def _storable(animal_id: int | None) -> bool:
    return animal_id is not None and _MIN_ID <= animal_id <= _MAX_ID


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on round-trip; stored values are always UTC.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def _to_domain(row: AnimalRow) -> Animal:
    return Animal(
        id=row.id,
        name=row.name,
        description=row.description,
        image_url=row.image_url,
        category=row.category,
        birth_date=row.birth_date,
        status=row.status,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _copy_onto(row: AnimalRow, animal: Animal) -> None:
    row.name = animal.name
    row.description = animal.description
    row.image_url = animal.image_url
    row.category = animal.category
    row.birth_date = animal.birth_date
    row.status = animal.status
    row.created_at = animal.created_at
    row.updated_at = animal.updated_at


class SqlAlchemyAnimalRepository:
    """SQLAlchemy-backed animal repository.

    Args:
        session_factory: Callable returning a SQLAlchemy Session context manager.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def add(self, animal: Animal) -> Animal:
        """INSERT a new row; the database assigns the id."""
        row = AnimalRow()
        _copy_onto(row, animal)
        with self._session_factory() as session:
            session.add(row)
            session.commit()
            return _to_domain(row)

    def get(self, animal_id: int) -> Animal | None:
        if not _storable(animal_id):
            return None
        with self._session_factory() as session:
            row = session.get(AnimalRow, animal_id)
            return _to_domain(row) if row is not None else None

    def save(self, animal: Animal) -> Animal | None:
        """UPDATE every column of an existing row."""
        if not _storable(animal.id):
            return None
        with self._session_factory() as session:
            row = session.get(AnimalRow, animal.id)
            if row is None:
                return None
            _copy_onto(row, animal)
            session.commit()
            return _to_domain(row)

    def delete(self, animal_id: int) -> bool:
        if not _storable(animal_id):
            return False
        with self._session_factory() as session:
            result = session.execute(delete(AnimalRow).where(AnimalRow.id == animal_id))
            session.commit()
            return bool(result.rowcount)

    def find_page(
        self,
        *,
        offset: int,
        limit: int,
        order_by: Sequence[tuple[str, bool]],
    ) -> tuple[list[Animal], int]:
        """SELECT one ordered slice of rows and the total row count.

        The total rides on each row as a window count, so it always matches
        the slice. A page past the end has no rows to carry it and is
        counted separately in the same session.

        Raises:
            KeyError: If an ``order_by`` attribute is not a sortable column.
        """
        clauses = [
            desc(_SORTABLE_COLUMNS[attribute]) if descending else asc(_SORTABLE_COLUMNS[attribute])
            for attribute, descending in order_by
        ]
        stmt = (
            select(AnimalRow, func.count().over())
            .order_by(*clauses)
            .offset(offset)
            .limit(limit)
        )
        with self._session_factory() as session:
            rows = session.execute(stmt).all()
            if rows:
                total = rows[0][1]
            else:
                total = session.scalar(select(func.count()).select_from(AnimalRow)) or 0
            return [_to_domain(row) for row, _ in rows], total
