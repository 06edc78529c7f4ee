"""Application DTOs (no ORM dependency)."""

from app.application.dtos.user import UserPage, UserResult

__all__ = [
    "UserPage",
    "UserResult",
]
