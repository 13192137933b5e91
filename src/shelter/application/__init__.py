"""Shelter application layer -- record store, status transitions, paging, wiring."""

from shelter.application.contributions import (
    LifespanContribution,
    MiddlewareContribution,
)
from shelter.application.paging import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    Page,
    PageRequest,
    SortOrder,
)
from shelter.application.status import StatusTransitionService
from shelter.application.store import AnimalStore, utc_now

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "AnimalStore",
    "LifespanContribution",
    "MiddlewareContribution",
    "Page",
    "PageRequest",
    "SortOrder",
    "StatusTransitionService",
    "utc_now",
]
