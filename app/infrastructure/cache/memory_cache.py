"""In-process TTL cache (ICacheService) for local development and tests.

Values are stored JSON-encoded, like the Redis backend, so a hit returns
a fresh copy that callers cannot mutate in place. Entries are per
process; use the Redis backend when running more than one worker.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryCache:
    """Dict-backed cache with per-entry expiry.

    Args:
        clock: Monotonic time source in seconds; injectable for tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._store: dict[str, tuple[str, float]] = {}

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            logger.debug("Cache MISS: %s", key)
            return None
        serialized, expires_at = entry
        if self._clock() >= expires_at:
            # expired
            del self._store[key]
            logger.debug("Cache EXPIRED: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(serialized)

    def _evict_expired(self, now: float) -> None:
        expired = [k for k, (_, expires_at) in self._store.items() if now >= expires_at]
        for key in expired:
            del self._store[key]
        if expired:
            logger.debug("Cache evicted %d expired entries", len(expired))

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        now = self._clock()
        # Swept on every write so keys that are never read again still go.
        self._evict_expired(now)
        self._store[key] = (json.dumps(value), now + ttl)
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
