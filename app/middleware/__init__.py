"""HTTP middleware: timeout, request ID, security headers.

Applied in main app; Starlette wraps in reverse order of add_middleware.
Import and use from app.main.
"""

from app.middleware.request_id import RequestIDMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware
from app.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
