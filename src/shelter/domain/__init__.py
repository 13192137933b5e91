"""Shelter domain -- pure Python model, validation and read projection.

No framework imports live here: the HTTP and persistence layers depend on
this package, never the other way round.
"""

from shelter.domain.animal import Animal, AnimalData, AnimalStatus
from shelter.domain.exceptions import (
    DomainError,
    MalformedRequestError,
    NotFoundError,
    ValidationError,
)
from shelter.domain.ports import AnimalRepositoryPort
from shelter.domain.validation import ValidationResult, ensure_valid, validate
from shelter.domain.views import AnimalView, compute_age, to_view

__all__ = [
    "Animal",
    "AnimalData",
    "AnimalRepositoryPort",
    "AnimalStatus",
    "AnimalView",
    "DomainError",
    "MalformedRequestError",
    "NotFoundError",
    "ValidationError",
    "ValidationResult",
    "compute_age",
    "ensure_valid",
    "to_view",
    "validate",
]
