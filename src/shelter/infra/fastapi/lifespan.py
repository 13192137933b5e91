"""Merge several lifespan hooks into the single one FastAPI accepts."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from fastapi import FastAPI

    from shelter.application.contributions import LifespanContribution

logger = logging.getLogger(__name__)


def compose_lifespan(
    hooks: list[LifespanContribution],
) -> Callable[[FastAPI], Any]:
    """Nest ``hooks`` by ascending priority.

    Teardown runs in reverse. If a hook fails on startup, the hooks already
    entered are still exited.
    """
    ordered = sorted(hooks, key=lambda contribution: contribution.priority)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with AsyncExitStack() as stack:
            for contribution in ordered:
                logger.info(
                    "lifespan_hook_enter priority=%d hook=%s",
                    contribution.priority,
                    getattr(contribution.hook, "__qualname__", repr(contribution.hook)),
                )
                await stack.enter_async_context(contribution.hook(app))
            yield

    return lifespan
