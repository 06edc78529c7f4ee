"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "UserRepository",
]
