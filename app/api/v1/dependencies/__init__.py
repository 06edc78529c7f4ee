"""FastAPI dependencies (composition root)."""

from app.api.v1.dependencies.users import (
    get_cache,
    get_user_listing_service,
    get_user_repo,
)

__all__ = [
    "get_cache",
    "get_user_listing_service",
    "get_user_repo",
]
