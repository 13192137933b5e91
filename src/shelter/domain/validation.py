"""Field validation for animal write input.

Every rule runs independently; all violations are collected rather than
stopping at the first one. Field-error keys are the client-facing (JSON)
field names.

Example:
    >>> from datetime import date
    >>> result = validate(AnimalData(name=""), today=date(2024, 10, 10))
    >>> result.ok
    False
    >>> result.field_errors["name"]
    'Name is mandatory'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from shelter.domain.animal import AnimalData, AnimalStatus
from shelter.domain.exceptions import ValidationError

if TYPE_CHECKING:
    from datetime import date

NAME_MANDATORY = "Name is mandatory"
CATEGORY_MANDATORY = "Category is mandatory"
BIRTH_DATE_MANDATORY = "Birth Date is mandatory"
BIRTH_DATE_IN_FUTURE = "Birth Date can't be a future date"
STATUS_MANDATORY = "Status is mandatory"
STATUS_UNKNOWN = "Status must be one of: " + ", ".join(s.value for s in AnimalStatus)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of :func:`validate`: ``Ok`` when ``field_errors`` is empty."""

    field_errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.field_errors


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate(data: AnimalData, today: date) -> ValidationResult:
    """Check every field constraint of ``data`` against ``today``.

    Args:
        data: Decoded write input.
        today: The current calendar date, used for the birth-date bound.

    Returns:
        ValidationResult listing every violated field.
    """
    errors: dict[str, str] = {}

    if _is_blank(data.name):
        errors["name"] = NAME_MANDATORY

    if _is_blank(data.category):
        errors["category"] = CATEGORY_MANDATORY

    if data.birth_date is None:
        errors["birthDate"] = BIRTH_DATE_MANDATORY
    elif data.birth_date > today:
        errors["birthDate"] = BIRTH_DATE_IN_FUTURE

    if data.status is None:
        errors["status"] = STATUS_MANDATORY
    else:
        try:
            AnimalStatus.parse(data.status)
        except ValueError:
            errors["status"] = STATUS_UNKNOWN

    return ValidationResult(errors)


def ensure_valid(data: AnimalData, today: date) -> None:
    """Validate ``data`` and raise on any violation.

    Raises:
        ValidationError: Carrying every field error found.
    """
    result = validate(data, today)
    if not result.ok:
        raise ValidationError(result.field_errors)
