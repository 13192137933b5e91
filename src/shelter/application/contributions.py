"""Middleware and lifespan hooks handed to the app factory.

Infrastructure modules export one of these per concern; ``create_shelter_app``
collects them and the factory orders them by ``priority``. Nothing here
imports a web framework.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

MIDDLEWARE_PRIORITY_MIN = 0
MIDDLEWARE_PRIORITY_MAX = 499

# Startup order: logging before the database so connection errors are logged.
LIFESPAN_PRIORITY_OBSERVABILITY = 50
LIFESPAN_PRIORITY_PERSISTENCE = 75


@dataclass(frozen=True, slots=True)
class MiddlewareContribution:
    """An ASGI middleware class plus where it sits in the stack.

    Lower ``priority`` wraps further out, so it sees the request first and
    the response last. Tracing uses 5 and request ids 10; leave 0-99 for
    that kind of cross-cutting context.
    """

    middleware_class: type[Any]
    priority: int = 400
    kwargs: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not MIDDLEWARE_PRIORITY_MIN <= self.priority <= MIDDLEWARE_PRIORITY_MAX:
            msg = (
                f"middleware priority {self.priority} outside "
                f"{MIDDLEWARE_PRIORITY_MIN}..{MIDDLEWARE_PRIORITY_MAX}"
            )
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class LifespanContribution:
    """``hook(app)`` returns an async context manager run around the app's life.

    Lower ``priority`` enters first and exits last.
    """

    hook: Any
    priority: int = 500
