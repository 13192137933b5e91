"""Unit tests for shelter.api.schemas."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from shelter.api.schemas import AnimalViewResponse, AnimalWrite, StatusUpdateRequest
from shelter.domain.animal import AnimalData, AnimalStatus
from shelter.domain.views import AnimalView


class TestAnimalWrite:
    @pytest.mark.unit
    def test_camel_case_input(self) -> None:
        body = AnimalWrite.model_validate(
            {
                "name": "Bobby",
                "imageUrl": "http://example.com/b.jpg",
                "category": "Dog",
                "birthDate": "2020-01-01",
                "status": "AVAILABLE",
            }
        )
        assert body.to_data() == AnimalData(
            name="Bobby",
            image_url="http://example.com/b.jpg",
            category="Dog",
            birth_date=date(2020, 1, 1),
            status="AVAILABLE",
        )

    @pytest.mark.unit
    def test_accepts_upper_case_url_alias(self) -> None:
        body = AnimalWrite.model_validate({"imageURL": "http://example.com/b.jpg"})
        assert body.image_url == "http://example.com/b.jpg"

    @pytest.mark.unit
    def test_everything_optional(self) -> None:
        assert AnimalWrite.model_validate({}).to_data() == AnimalData()

    @pytest.mark.unit
    def test_unknown_status_token_is_kept_for_validation(self) -> None:
        assert AnimalWrite.model_validate({"status": "LOST"}).status == "LOST"

    @pytest.mark.unit
    def test_provided_fields(self) -> None:
        body = AnimalWrite.model_validate({"name": "Max", "description": None})
        assert body.provided_fields() == {"name", "description"}

    @pytest.mark.unit
    def test_wrong_type_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            AnimalWrite.model_validate({"birthDate": "yesterday"})


class TestStatusUpdateRequest:
    @pytest.mark.unit
    def test_known_status(self) -> None:
        assert StatusUpdateRequest.model_validate({"status": "ADOPTED"}).status is (
            AnimalStatus.ADOPTED
        )

    @pytest.mark.unit
    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            StatusUpdateRequest.model_validate({"status": "UNKNOWN"})


class TestAnimalViewResponse:
    @pytest.mark.unit
    def test_serializes_camel_case(self) -> None:
        now = datetime(2024, 10, 10, 12, 0, tzinfo=UTC)
        view = AnimalView(
            id=3,
            name="Bobby",
            description=None,
            image_url="http://example.com/b.jpg",
            category="Dog",
            birth_date=date(2020, 1, 1),
            status=AnimalStatus.AVAILABLE,
            age=4,
            created_at=now,
            updated_at=now,
        )
        data = AnimalViewResponse.from_view(view).model_dump(mode="json", by_alias=True)
        assert data == {
            "id": 3,
            "name": "Bobby",
            "description": None,
            "imageUrl": "http://example.com/b.jpg",
            "category": "Dog",
            "birthDate": "2020-01-01",
            "status": "AVAILABLE",
            "age": 4,
            "createdAt": "2024-10-10T12:00:00Z",
            "updatedAt": "2024-10-10T12:00:00Z",
        }
