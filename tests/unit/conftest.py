"""Unit-test fixtures: an in-memory repository and a store built on it."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING

import pytest

from shelter.application.store import AnimalStore
from shelter.domain.animal import AnimalData, AnimalStatus

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shelter.domain.animal import Animal
    from tests.conftest import FakeClock


class InMemoryAnimalRepository:
    """Dict-backed ``AnimalRepositoryPort`` for store tests."""

    def __init__(self) -> None:
        self.rows: dict[int, Animal] = {}
        self._next_id = 1

    def add(self, animal: Animal) -> Animal:
        stored = replace(animal, id=self._next_id)
        self.rows[self._next_id] = stored
        self._next_id += 1
        return stored

    def get(self, animal_id: int) -> Animal | None:
        return self.rows.get(animal_id)

    def save(self, animal: Animal) -> Animal | None:
        if animal.id not in self.rows:
            return None
        self.rows[animal.id] = animal
        return animal

    def delete(self, animal_id: int) -> bool:
        return self.rows.pop(animal_id, None) is not None

    def find_page(
        self,
        *,
        offset: int,
        limit: int,
        order_by: Sequence[tuple[str, bool]],
    ) -> tuple[list[Animal], int]:
        items = list(self.rows.values())
        for attribute, descending in reversed(order_by):
            items.sort(key=lambda a: getattr(a, attribute), reverse=descending)
        return items[offset : offset + limit], len(items)


@pytest.fixture()
def repository() -> InMemoryAnimalRepository:
    return InMemoryAnimalRepository()


@pytest.fixture()
def store(repository: InMemoryAnimalRepository, clock: FakeClock) -> AnimalStore:
    return AnimalStore(repository, clock=clock)


@pytest.fixture()
def valid_data() -> AnimalData:
    return AnimalData(
        name="Bobby",
        description="Small and friendly",
        image_url="http://example.com/bobby.jpg",
        category="Dog",
        birth_date=date(2020, 1, 1),
        status=AnimalStatus.AVAILABLE,
    )
