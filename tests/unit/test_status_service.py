"""Unit tests for shelter.application.status."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

import pytest

from shelter.application.status import StatusTransitionService
from shelter.domain.animal import AnimalData, AnimalStatus
from shelter.domain.exceptions import NotFoundError

if TYPE_CHECKING:
    from shelter.application.store import AnimalStore
    from tests.conftest import FakeClock
    from tests.unit.conftest import InMemoryAnimalRepository


@pytest.fixture()
def service(store: AnimalStore) -> StatusTransitionService:
    return StatusTransitionService(store)


class TestUpdateStatus:
    @pytest.mark.unit
    def test_changes_only_status_and_updated_at(
        self,
        service: StatusTransitionService,
        store: AnimalStore,
        valid_data: AnimalData,
        clock: FakeClock,
    ) -> None:
        created = store.create(valid_data)
        clock.advance(hours=2)
        updated = service.update_status(created.id, AnimalStatus.ADOPTED)  # type: ignore[arg-type]
        assert updated.status is AnimalStatus.ADOPTED
        assert updated.updated_at == clock.now
        assert replace(updated, status=created.status, updated_at=created.updated_at) == created

    @pytest.mark.unit
    def test_is_persisted(
        self, service: StatusTransitionService, store: AnimalStore, valid_data: AnimalData
    ) -> None:
        created = store.create(valid_data)
        service.update_status(created.id, "ADOPTED")  # type: ignore[arg-type]
        assert store.get(created.id).status is AnimalStatus.ADOPTED  # type: ignore[arg-type]

    @pytest.mark.unit
    def test_reverse_transition_allowed(
        self, service: StatusTransitionService, store: AnimalStore, valid_data: AnimalData
    ) -> None:
        created = store.create(replace(valid_data, status=AnimalStatus.ADOPTED))
        updated = service.update_status(created.id, AnimalStatus.AVAILABLE)  # type: ignore[arg-type]
        assert updated.status is AnimalStatus.AVAILABLE

    @pytest.mark.unit
    def test_same_status_is_accepted_write(
        self,
        service: StatusTransitionService,
        store: AnimalStore,
        valid_data: AnimalData,
        clock: FakeClock,
    ) -> None:
        created = store.create(valid_data)
        clock.advance(seconds=30)
        updated = service.update_status(created.id, AnimalStatus.AVAILABLE)  # type: ignore[arg-type]
        assert updated.status is AnimalStatus.AVAILABLE
        assert updated.updated_at == clock.now

    @pytest.mark.unit
    def test_bypasses_field_validation(
        self,
        service: StatusTransitionService,
        store: AnimalStore,
        repository: InMemoryAnimalRepository,
        valid_data: AnimalData,
    ) -> None:
        created = store.create(valid_data)
        # A record that would no longer pass validation (blank name).
        repository.rows[created.id] = created.with_changes(name="")  # type: ignore[index]
        updated = service.update_status(created.id, AnimalStatus.ADOPTED)  # type: ignore[arg-type]
        assert updated.status is AnimalStatus.ADOPTED

    @pytest.mark.unit
    def test_unknown_id_has_no_side_effect(
        self,
        service: StatusTransitionService,
        repository: InMemoryAnimalRepository,
    ) -> None:
        with pytest.raises(NotFoundError):
            service.update_status(404, AnimalStatus.ADOPTED)
        assert repository.rows == {}

    @pytest.mark.unit
    def test_unknown_token_rejected_before_lookup(
        self,
        service: StatusTransitionService,
        store: AnimalStore,
        valid_data: AnimalData,
    ) -> None:
        created = store.create(valid_data)
        with pytest.raises(ValueError):
            service.update_status(created.id, "UNKNOWN")  # type: ignore[arg-type]
        assert store.get(created.id) == created  # type: ignore[arg-type]
