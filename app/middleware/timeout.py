"""Request timeout middleware (raw ASGI).

Bounds the whole request, including the user store query on a cache
miss. A request still running after timeout_seconds is cancelled and
answered with a 504 JSON error, provided nothing has been sent yet.
"""

import asyncio
import logging
from typing import Callable

from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


def TimeoutMiddleware(app: Callable, timeout_seconds: float) -> Callable:
    """Cancel HTTP requests that run longer than timeout_seconds."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        started = False

        async def track_start(message: dict) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await asyncio.wait_for(app(scope, receive, track_start), timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                "%s %s exceeded %ss",
                scope.get("method", ""),
                scope.get("path", ""),
                timeout_seconds,
            )
            if started:
                # Headers are out; the server closes the truncated response.
                return
            response = JSONResponse(
                status_code=504,
                content={
                    "error": "GATEWAY_TIMEOUT",
                    "message": f"Request timed out after {timeout_seconds} seconds",
                    "details": {"timeout_seconds": timeout_seconds},
                },
            )
            await response(scope, receive, send)

    return asgi_app
