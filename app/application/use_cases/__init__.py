"""Application use cases (orchestration over repository and cache ports)."""

from app.application.use_cases.users import UserListingService

__all__ = ["UserListingService"]
