"""Health check endpoints for liveness and readiness probes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.dependencies import get_cache
from app.application.interfaces.services import ICacheService
from app.infrastructure.persistence.database import get_db
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "User store unreachable", "model": ReadinessErrorResponse}},
)
async def readiness_check(
    db: Annotated[AsyncSession, Depends(get_db)],
    cache: Annotated[ICacheService | None, Depends(get_cache)],
) -> ReadinessResponse | JSONResponse:
    """Return 200 if the user store answers; 503 otherwise.

    The cache is reported but does not affect readiness: the listing
    works without it.
    """
    try:
        await db.execute(text("SELECT 1"))
    except (DBAPIError, OSError) as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(message="User store unreachable").model_dump(),
        )
    if cache is None:
        cache_state = "disabled"
    elif cache.is_available():
        cache_state = "available"
    else:
        cache_state = "unavailable"
    return ReadinessResponse(cache=cache_state)
