"""ASGI entry point for the user directory.

Run with: uvicorn app.main:app

create_app() only wires pieces together (lifespan, error handlers,
middleware, routers); listing logic lives in app.application and the
HTML in app.pages. Settings are read when create_app() runs, so tests
can set the environment before importing this module.
"""

from fastapi import FastAPI

from app.api.v1 import api_router
from app.core.config import Settings, get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.middleware import (
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
)
from app.pages import router as pages_router
from app.shared.telemetry.logging import setup_logging


def install_middleware(app: FastAPI, settings: Settings) -> None:
    """Add the middleware stack. The last one added is outermost, so request
    ID wraps security headers, which wrap the timeout; a 504 from the timeout
    still carries both sets of headers.
    """
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

def create_app() -> FastAPI:
    """Build the directory app: HTML listing at / and /users, JSON health under /api/v1."""
    settings = get_settings()
    setup_logging()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    register_exception_handlers(app)

    install_middleware(app, settings)

    app.include_router(pages_router)
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
