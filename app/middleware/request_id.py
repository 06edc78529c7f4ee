"""Request ID middleware (raw ASGI).

Takes the caller's request ID header when it is a short, log-safe token
and otherwise mints a UUID4. The ID is echoed on the response, stored in
scope["state"] and held in a ContextVar so every log line written while
handling the request carries it.
"""

import re
import uuid
from typing import Callable

from starlette.datastructures import Headers, MutableHeaders

from app.shared.context import reset_request_id, set_request_id

_SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")


def _resolve_request_id(raw: str | None) -> str:
    """Caller-supplied ID if log-safe, else a fresh UUID4."""
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Tag each HTTP request and its response with a request ID."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        request_id = _resolve_request_id(Headers(scope=scope).get(header_name))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[header_name] = request_id
            await send(message)

        token = set_request_id(request_id)
        try:
            await app(scope, receive, send_with_id)
        finally:
            reset_request_id(token)

    return asgi_app
