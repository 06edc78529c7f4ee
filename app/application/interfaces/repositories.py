"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.user import UserResult


class IUserRepository(Protocol):
    """Protocol for the read-only user store (DIP)."""

    async def search_page(
        self, search: str, offset: int, limit: int
    ) -> tuple[list[UserResult], int]:
        """Return (users in [offset, offset + limit), total matching count).

        Empty search matches every user; otherwise a user matches when the
        term is a substring of name or of email.
        """
        ...
