"""Service interfaces (ports) for the application layer."""

from __future__ import annotations

from typing import Any, Protocol


class ICacheService(Protocol):
    """Protocol for result cache backends (Redis, in-memory).

    Implementations must not raise on backend failure: get() returns None
    and set() returns False so callers fall back to the store.
    """

    def is_available(self) -> bool:
        """Return True if the cache is connected and usable."""
        ...

    async def get(self, key: str) -> Any | None:
        """Return the cached (JSON-decoded) value or None."""
        ...

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store a JSON-serializable value with TTL in seconds."""
        ...
