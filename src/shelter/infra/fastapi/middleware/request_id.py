"""Per-request correlation id (``X-Request-ID``).

A client may send its own id; anything that is not a UUID is replaced with a
fresh uuid4. While the request runs, the id is available from
:func:`get_request_id` and ``request.state.request_id``, and every structlog
event carries it as ``request_id``. The response echoes it back.
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

import structlog

from shelter.application.contributions import MiddlewareContribution

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, MutableMapping

    Message = MutableMapping[str, Any]
    Send = Callable[[Message], Awaitable[None]]

REQUEST_ID_HEADER = "X-Request-ID"
_HEADER_KEY = REQUEST_ID_HEADER.lower().encode("latin-1")

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")


def get_request_id() -> str:
    """Id of the request being handled, or ``""`` outside a request."""
    return request_id_ctx.get()


def _is_valid_uuid(value: str | None) -> bool:
    if not value:
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def _extract_header(headers: list[tuple[bytes, bytes]], name: bytes) -> str:
    return next(
        (value.decode("latin-1") for key, value in headers if key.lower() == name),
        "",
    )


class RequestIdMiddleware:
    """Pure ASGI middleware; installed through :data:`contribution`."""

    def __init__(self, app: Any) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        incoming = _extract_header(scope.get("headers", []), _HEADER_KEY)
        request_id = incoming if _is_valid_uuid(incoming) else str(uuid.uuid4())
        header = (_HEADER_KEY, request_id.encode("latin-1"))

        # request.state survives past this middleware, the contextvar does not.
        scope.setdefault("state", {})["request_id"] = request_id
        token = request_id_ctx.set(request_id)
        structlog.contextvars.bind_contextvars(request_id=request_id)

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                message = {**message, "headers": [*message.get("headers", []), header]}
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
            request_id_ctx.reset(token)


contribution = MiddlewareContribution(middleware_class=RequestIdMiddleware, priority=10)
