"""Failures the service reports to clients.

The HTTP layer maps each class to a status code and copies ``error_code``
into the problem response. ``context`` holds identifiers that help explain
the failure; it is scrubbed before it leaves the process.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "DomainError",
    "MalformedRequestError",
    "NotFoundError",
    "ValidationError",
]


class DomainError(Exception):
    """Root of the hierarchy; reported as 400 when no subclass matches.

    >>> str(DomainError("Operation failed", context={"animal_id": 7}))
    'Operation failed (animal_id=7)'
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} ({details})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, context={self.context!r})"


class NotFoundError(DomainError):
    """No record with the given id (404).

    >>> NotFoundError("Animal", 42).message
    'Animal not found: 42'
    """

    error_code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource_type: str, resource_id: int | str, **extra: Any) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            {"resource_type": resource_type, "resource_id": str(resource_id), **extra},
        )


class ValidationError(DomainError):
    """Write input broke one or more field rules (400).

    ``field_errors`` maps each offending JSON field name to its message, so
    one response tells the client everything that needs fixing.
    """

    error_code = "VALIDATION_ERROR"

    def __init__(self, field_errors: dict[str, str]) -> None:
        if not field_errors:
            msg = "ValidationError needs at least one field error"
            raise ValueError(msg)
        self.field_errors = dict(field_errors)
        names = ", ".join(repr(name) for name in self.field_errors)
        super().__init__(f"Validation failed for {names}")

    def __str__(self) -> str:
        return self.message


class MalformedRequestError(DomainError):
    """Input that cannot even be decoded: bad tokens, paging or sort values (400).

    Clients only ever see a fixed message for this error; ``message`` and
    ``context`` are for the server log.
    """

    error_code = "MALFORMED_REQUEST"

    def __init__(self, message: str = "Malformed request", **context: Any) -> None:
        super().__init__(message, context)
