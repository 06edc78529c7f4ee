"""User listing use case: cached, paginated name/email search.

Cache-aside over IUserRepository. A page is served from the cache for
its full TTL even if the store changes meanwhile; there is no
invalidation and no single-flight de-duplication of concurrent misses.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.application.dtos.user import UserPage
from app.application.services.hash_service import HashService
from app.core.constants import USERS_CACHE_TTL_SECONDS, USERS_PAGE_SIZE
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IUserRepository
    from app.application.interfaces.services import ICacheService

logger = logging.getLogger(__name__)


class UserListingService:
    """List users one page at a time, caching each (search, page) result."""

    def __init__(
        self,
        user_repo: IUserRepository,
        cache: ICacheService | None = None,
        *,
        hash_service: HashService | None = None,
        ttl: int = USERS_CACHE_TTL_SECONDS,
        per_page: int = USERS_PAGE_SIZE,
    ) -> None:
        self.user_repo = user_repo
        self.cache = cache
        self.hash_service = hash_service or HashService()
        self.ttl = ttl
        self.per_page = per_page

    def cache_key(self, search: str, page: int) -> str:
        return self.hash_service.users_page_key(search, page)

    @traced("users.list")
    async def list_users(self, search: str = "", page: int = 1) -> UserPage:
        """Return one page of users whose name or email contains search.

        Args:
            search: Substring to match; empty string matches every user.
            page: 1-based page number (callers clamp invalid input to 1).

        Returns:
            UserPage for (search, page), from the cache when present.

        Raises:
            UserStoreUnavailableException: On a cache miss when the store fails.
        """
        key = self.cache_key(search, page)
        cached = await self._get_cached(key)
        if cached is not None:
            add_span_attributes(cache_hit=True)
            return cached
        add_span_attributes(cache_hit=False)

        offset = (page - 1) * self.per_page
        items, total = await self.user_repo.search_page(search, offset, self.per_page)
        result = UserPage(
            items=tuple(items), total=total, page=page, per_page=self.per_page
        )
        await self._store(key, result)
        return result

    async def _get_cached(self, key: str) -> UserPage | None:
        if self.cache is None:
            return None
        if not self.cache.is_available():
            logger.warning("Result cache unavailable; querying user store directly")
            return None
        payload = await self.cache.get(key)
        if payload is None:
            return None
        try:
            return UserPage.from_dict(payload)
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding malformed cache entry %s", key)
            return None

    async def _store(self, key: str, result: UserPage) -> None:
        if self.cache is None or not self.cache.is_available():
            return
        if not await self.cache.set(key, result.to_dict(), ttl=self.ttl):
            logger.warning("Failed to cache user page %s", key)
