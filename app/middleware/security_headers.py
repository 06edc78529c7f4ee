"""Security headers middleware (raw ASGI).

The listing is a single server-rendered page: no scripts, one external
stylesheet, a GET form posting back to itself. The CSP allows exactly
that. Headers a route sets itself are left alone.
"""

from typing import Callable

from starlette.datastructures import MutableHeaders

STYLESHEET_ORIGIN = "https://cdn.jsdelivr.net"

DEFAULT_HEADERS = {
    "Content-Security-Policy": (
        f"default-src 'none'; style-src {STYLESHEET_ORIGIN}; "
        "form-action 'self'; frame-ancestors 'none'; base-uri 'none'"
    ),
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Add headers (DEFAULT_HEADERS unless given) to every HTTP response."""
    defaults = dict(DEFAULT_HEADERS if headers is None else headers)

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        async def send_with_headers(message: dict) -> None:
            if message["type"] == "http.response.start":
                response_headers = MutableHeaders(scope=message)
                for name, value in defaults.items():
                    response_headers.setdefault(name, value)
            await send(message)

        await app(scope, receive, send_with_headers)

    return asgi_app
