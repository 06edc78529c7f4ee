"""User repository: paginated substring search over name and email.

Interface methods return application DTOs (UserResult), never ORM rows.
"""

from __future__ import annotations

import logging

from sqlalchemy import ColumnElement, Select, func, or_, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.domain.exceptions import UserStoreUnavailableException
from app.infrastructure.persistence.models.user import User

logger = logging.getLogger(__name__)


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult."""
    return UserResult(id=u.id, name=u.name, email=u.email, phone=u.phone or "")


def search_condition(search: str) -> ColumnElement[bool] | None:
    """Return the name-or-email match clause for search, or None when empty.

    The two LIKE clauses are combined in a single or_() so the OR stays
    grouped when further filters are AND-ed onto the statement. Wildcards
    in the term (% and _) are escaped and match literally; matching is
    case-insensitive.
    """
    if not search:
        return None
    return or_(
        User.name.icontains(search, autoescape=True),
        User.email.icontains(search, autoescape=True),
    )


class UserRepository:
    """Read-only user store (IUserRepository)."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def _filtered(self, stmt: Select, search: str) -> Select:
        condition = search_condition(search)
        return stmt if condition is None else stmt.where(condition)

    async def search_page(
        self, search: str, offset: int, limit: int
    ) -> tuple[list[UserResult], int]:
        """Return one page of users matching search and the total match count.

        Rows are ordered by id so consecutive pages never overlap.
        Raises UserStoreUnavailableException when the database fails.
        """
        count_stmt = self._filtered(select(func.count()).select_from(User), search)
        page_stmt = (
            self._filtered(select(User), search)
            .order_by(User.id)
            .offset(max(offset, 0))
            .limit(limit)
        )
        try:
            total = (await self.db.execute(count_stmt)).scalar_one()
            rows = (await self.db.execute(page_stmt)).scalars().all()
        except (DBAPIError, OSError) as e:
            logger.exception("User search failed (offset=%s, limit=%s)", offset, limit)
            raise UserStoreUnavailableException("user search") from e
        return [_user_to_result(u) for u in rows], int(total)
