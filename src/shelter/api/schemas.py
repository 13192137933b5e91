"""Request and response models for the animals API.

JSON field names are camelCase. Write bodies decode every field as optional
so that missing values surface as field errors from the validation layer
rather than as decoding failures. ``status`` is kept as a raw string on
create/update for the same reason.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shelter.domain.animal import AnimalData, AnimalStatus
from shelter.domain.views import AnimalView


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -- Requests -----------------------------------------------------------------


class AnimalWrite(_CamelModel):
    """Body of create, replace and merge requests."""

    name: str | None = Field(default=None, examples=["Bobby"])
    description: str | None = Field(default=None, examples=["Small and friendly"])
    image_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("imageUrl", "imageURL", "image_url"),
        examples=["http://example.com/bobby.jpg"],
    )
    category: str | None = Field(default=None, examples=["Dog"])
    birth_date: date | None = Field(default=None, examples=["2020-01-01"])
    status: str | None = Field(default=None, examples=["AVAILABLE"])

    def to_data(self) -> AnimalData:
        return AnimalData(
            name=self.name,
            description=self.description,
            image_url=self.image_url,
            category=self.category,
            birth_date=self.birth_date,
            status=self.status,
        )

    def provided_fields(self) -> set[str]:
        """Names of the fields present in the request body."""
        return set(self.model_fields_set)


class StatusUpdateRequest(_CamelModel):
    """Body of the status transition endpoint."""

    status: AnimalStatus


# -- Responses ----------------------------------------------------------------


class AnimalViewResponse(_CamelModel):
    """An animal with its computed age."""

    id: int
    name: str
    description: str | None = None
    image_url: str | None = None
    category: str
    birth_date: date
    status: AnimalStatus
    age: int = Field(..., ge=0, description="Whole years since birth date")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: AnimalView) -> AnimalViewResponse:
        return cls(
            id=view.id,
            name=view.name,
            description=view.description,
            image_url=view.image_url,
            category=view.category,
            birth_date=view.birth_date,
            status=view.status,
            age=view.age,
            created_at=view.created_at,
            updated_at=view.updated_at,
        )


class PageMetadata(_CamelModel):
    number: int
    size: int
    total_elements: int
    total_pages: int


class AnimalPageResponse(_CamelModel):
    """One page of animals plus navigation totals."""

    items: list[AnimalViewResponse]
    page: PageMetadata
