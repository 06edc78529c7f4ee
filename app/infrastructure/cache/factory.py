"""Cache factory: creates the result cache backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.application.interfaces.services import ICacheService

if TYPE_CHECKING:
    from app.core.config import Settings


async def build_cache(settings: "Settings | None" = None) -> ICacheService | None:
    """Create (and connect) the configured cache backend.

    Args:
        settings: Application settings; if None, uses get_settings().

    Returns:
        CacheService (redis), InMemoryCache (memory), or None (none).
        A Redis backend that fails to connect is still returned; it reports
        is_available() False and the listing queries the store directly.

    Raises:
        ValueError: Unknown backend.
    """
    from app.core.config import get_settings

    s = settings or get_settings()
    backend = s.cache_backend.lower()

    if backend == "redis":
        from app.infrastructure.cache.redis_cache import CacheService

        cache = CacheService()
        await cache.connect()
        return cache
    if backend == "memory":
        from app.infrastructure.cache.memory_cache import InMemoryCache

        return InMemoryCache()
    if backend == "none":
        return None
    raise ValueError(
        f"Unknown cache backend: {backend}. Supported: 'redis', 'memory', 'none'"
    )
