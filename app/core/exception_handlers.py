"""Exception handlers: every error leaves the app as a JSON body.

Shape: {"error": CODE, "message": str, "details"?: ...}. A listing request
that fails therefore returns JSON with a 5xx status, never a half-rendered
HTML page.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import DirectoryException

logger = logging.getLogger(__name__)

# Domain error_code -> HTTP status; unlisted codes are 500.
_ERROR_CODE_STATUS: dict[str, int] = {
    "USER_STORE_UNAVAILABLE": 503,
}


def _error(
    status: int,
    code: str,
    message: object,
    details: object = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body: dict[str, object] = {"error": code, "message": message}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status, content=body, headers=headers)


async def _directory_error(request: Request, exc: DirectoryException) -> JSONResponse:
    status = _ERROR_CODE_STATUS.get(exc.error_code, 500)
    logger.error("%s %s -> %s %s", request.method, request.url.path, status, exc.error_code)
    return JSONResponse(status_code=status, content=exc.to_dict())


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(
        422, "VALIDATION_ERROR", "Request validation failed", jsonable_encoder(exc.errors())
    )


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, "HTTP_ERROR", exc.detail, headers=exc.headers)


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    """500 for anything unexpected; the exception text is only exposed in debug."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error(500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on app (call once from create_app)."""
    app.add_exception_handler(DirectoryException, _directory_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unhandled_error)
