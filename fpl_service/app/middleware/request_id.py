"""Request ID middleware for per-request tracking.

1. Takes the request id from the X-Request-ID header, or generates a UUID4
2. Stores it in ``request.state.request_id``
3. Adds it to the logging context for the duration of the request
4. Echoes it in the X-Request-ID response header
"""

from __future__ import annotations

import re
import uuid
from typing import TYPE_CHECKING

from starlette.datastructures import Headers, MutableHeaders

from fpl_service.infra.logging.context import remove_from_log_context, set_log_context

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

# Client supplied ids are only trusted when short and free of control characters
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:\-]{1,128}$")


class RequestIDMiddleware:
    """Pure ASGI middleware attaching a request id to every HTTP request.

    Usage:
        app.add_middleware(RequestIDMiddleware)

        @app.get("/")
        async def root(request: Request) -> dict[str, str]:
            return {"request_id": request.state.request_id}
    """

    header_name = "x-request-id"

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    def _request_id(self, scope: Scope) -> str:
        incoming = Headers(scope=scope).get(self.header_name)
        if incoming and _VALID_REQUEST_ID.match(incoming):
            return incoming
        return str(uuid.uuid4())

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = self._request_id(scope)
        scope.setdefault("state", {})["request_id"] = request_id
        set_log_context(request_id=request_id)

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[self.header_name] = request_id
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            remove_from_log_context("request_id")
