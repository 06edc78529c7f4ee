"""Cache: result cache backends and the backend factory.

CacheService (Redis) is used in deployment; InMemoryCache serves local
development and tests. Both implement ICacheService.
"""

from app.infrastructure.cache.factory import build_cache
from app.infrastructure.cache.memory_cache import InMemoryCache
from app.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "InMemoryCache",
    "build_cache",
]
