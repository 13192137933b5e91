"""Animals REST API router.

CRUD over animal records plus the dedicated status transition endpoint.
Every read returns the view projection with the computed ``age``.
"""

# NOTE: Do NOT use ``from __future__ import annotations`` here.
# FastAPI needs runtime-evaluable annotations for path, query and body params.

from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from shelter.api.dependencies import StatusServiceDep, StoreDep
from shelter.api.schemas import (
    AnimalPageResponse,
    AnimalViewResponse,
    AnimalWrite,
    PageMetadata,
    StatusUpdateRequest,
)
from shelter.application.paging import DEFAULT_PAGE_SIZE, PageRequest
from shelter.domain.views import to_view
from shelter.infra.fastapi.error_handlers import ProblemDetail

router = APIRouter(
    prefix="/animals",
    tags=["animals"],
    responses={400: {"model": ProblemDetail}},
)

_NOT_FOUND = {404: {"model": ProblemDetail}}


# -- Endpoints ----------------------------------------------------------------


@router.post("", status_code=status.HTTP_201_CREATED)
def create_animal(body: AnimalWrite, store: StoreDep, response: Response) -> AnimalViewResponse:
    """Create an animal record."""
    animal = store.create(body.to_data())
    response.headers["Location"] = f"{router.prefix}/{animal.id}"
    return AnimalViewResponse.from_view(to_view(animal, store.today()))


@router.get("")
def list_animals(
    store: StoreDep,
    page: Annotated[int, Query(description="Zero-based page index")] = 0,
    size: Annotated[int, Query(description="Page size (1-100)")] = DEFAULT_PAGE_SIZE,
    sort: Annotated[
        list[str] | None,
        Query(description="Sort key as property[,asc|desc]; repeatable"),
    ] = None,
) -> AnimalPageResponse:
    """List animals one page at a time."""
    result = store.list(PageRequest.from_query(page=page, size=size, sort=sort))
    today = store.today()
    return AnimalPageResponse(
        items=[AnimalViewResponse.from_view(to_view(a, today)) for a in result.items],
        page=PageMetadata(
            number=result.number,
            size=result.size,
            total_elements=result.total_elements,
            total_pages=result.total_pages,
        ),
    )


@router.get("/{animal_id}", responses=_NOT_FOUND)
def get_animal(animal_id: int, store: StoreDep) -> AnimalViewResponse:
    """Retrieve an animal by ID."""
    return AnimalViewResponse.from_view(to_view(store.get(animal_id), store.today()))


@router.put("/{animal_id}", responses=_NOT_FOUND)
def replace_animal(animal_id: int, body: AnimalWrite, store: StoreDep) -> AnimalViewResponse:
    """Replace every client field of an animal."""
    animal = store.update(animal_id, body.to_data())
    return AnimalViewResponse.from_view(to_view(animal, store.today()))


@router.patch("/{animal_id}", responses=_NOT_FOUND)
def patch_animal(animal_id: int, body: AnimalWrite, store: StoreDep) -> AnimalViewResponse:
    """Change only the fields present in the body."""
    animal = store.patch(animal_id, body.to_data(), body.provided_fields())
    return AnimalViewResponse.from_view(to_view(animal, store.today()))


@router.delete(
    "/{animal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_NOT_FOUND,
)
def delete_animal(animal_id: int, store: StoreDep) -> Response:
    """Delete an animal record."""
    store.delete(animal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{animal_id}/status", responses=_NOT_FOUND)
def update_animal_status(
    animal_id: int,
    body: StatusUpdateRequest,
    service: StatusServiceDep,
    store: StoreDep,
) -> AnimalViewResponse:
    """Set the adoption status of an animal."""
    animal = service.update_status(animal_id, body.status)
    return AnimalViewResponse.from_view(to_view(animal, store.today()))
