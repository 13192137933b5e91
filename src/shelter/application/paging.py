"""Page requests and page results for list queries.

Sort expressions follow the ``property[,asc|desc]`` convention, e.g.
``sort=name,desc``. Properties are the client-facing (JSON) names.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from shelter.domain.exceptions import MalformedRequestError

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
# Largest OFFSET a 64-bit bind parameter can carry.
MAX_OFFSET = 2**63 - 1

# Client-facing sort property -> stored attribute.
SORTABLE_PROPERTIES: dict[str, str] = {
    "id": "id",
    "name": "name",
    "category": "category",
    "birthDate": "birth_date",
    "status": "status",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


@dataclass(frozen=True, slots=True)
class SortOrder:
    """One sort key: stored attribute plus direction."""

    attribute: str
    descending: bool = False

    @classmethod
    def parse(cls, expression: str) -> SortOrder:
        """Parse a ``property[,asc|desc]`` expression.

        Raises:
            MalformedRequestError: If the property or direction is unknown.
        """
        prop, _, direction = expression.partition(",")
        prop = prop.strip()
        direction = direction.strip().lower() or "asc"
        if prop not in SORTABLE_PROPERTIES:
            raise MalformedRequestError("Unsupported sort property", sort=prop)
        if direction not in ("asc", "desc"):
            raise MalformedRequestError("Unsupported sort direction", sort=expression)
        return cls(SORTABLE_PROPERTIES[prop], descending=direction == "desc")


@dataclass(frozen=True, slots=True)
class PageRequest:
    """Zero-based page request.

    Ordering always ends with ``id`` ascending (unless ``id`` is already a
    key) so that pages are stable across calls.
    """

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort: tuple[SortOrder, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.page < 0:
            raise MalformedRequestError("Page index must not be negative", page=self.page)
        if not 1 <= self.size <= MAX_PAGE_SIZE:
            raise MalformedRequestError(
                f"Page size must be between 1 and {MAX_PAGE_SIZE}", size=self.size
            )
        if self.page * self.size > MAX_OFFSET:
            raise MalformedRequestError("Page index out of range", page=self.page)

    @classmethod
    def from_query(
        cls,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
        sort: list[str] | None = None,
    ) -> PageRequest:
        return cls(page=page, size=size, sort=tuple(SortOrder.parse(s) for s in sort or []))

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def order_by(self) -> list[tuple[str, bool]]:
        keys = [(s.attribute, s.descending) for s in self.sort]
        if not any(attribute == "id" for attribute, _ in keys):
            keys.append(("id", False))
        return keys


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One page of results plus the totals needed for navigation."""

    items: list[T]
    number: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0
