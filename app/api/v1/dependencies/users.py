"""User listing dependencies (composition root).

Routes depend on UserListingService only; the repository, cache and
settings are wired here.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.services import ICacheService
from app.application.use_cases.users import UserListingService
from app.core.config import get_settings
from app.infrastructure.persistence.database import get_db
from app.infrastructure.persistence.repositories import UserRepository


def get_cache(request: Request) -> ICacheService | None:
    """Result cache created in the app lifespan (None when caching is off)."""
    return getattr(request.app.state, "cache", None)


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    """User repository for the listing (read-only session)."""
    return UserRepository(db)


async def get_user_listing_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    cache: Annotated[ICacheService | None, Depends(get_cache)],
) -> UserListingService:
    """Listing use case with page size and cache TTL from settings."""
    settings = get_settings()
    return UserListingService(
        user_repo,
        cache,
        ttl=settings.users_cache_ttl,
        per_page=settings.users_page_size,
    )
