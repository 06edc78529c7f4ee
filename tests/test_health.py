"""Smoke tests for health and app wiring."""

import pytest
from httpx import AsyncClient
from sqlalchemy import text

from app.infrastructure.persistence import database
from app.infrastructure.persistence.database import dispose_engine


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"


@pytest.mark.requires_db
async def test_ready_reports_store_and_cache(client: AsyncClient) -> None:
    """GET /api/v1/health/ready pings the store; lifespan did not run, so no cache."""
    try:
        response = await client.get("/api/v1/health/ready")
    finally:
        await dispose_engine()
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "cache": "disabled"}


async def test_unknown_path_returns_json_404(client: AsyncClient) -> None:
    response = await client.get("/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"


@pytest.mark.requires_db
async def test_get_db_always_has_an_engine() -> None:
    """DATABASE_URL is validated by Settings, so get_db never lacks a session factory."""
    try:
        async for session in database.get_db():
            assert database.engine is not None
            assert (await session.execute(text("SELECT 1"))).scalar_one() == 1
    finally:
        await dispose_engine()
