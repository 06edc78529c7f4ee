"""Redis result cache (ICacheService).

Values are stored as JSON strings under SETEX so Redis expires them on
its own. Failures never reach the caller: a broken connection gets one
reconnect-and-retry, after which get() reports a miss and set() returns
False, and the listing falls back to the user store.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from app.core.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CONNECTION_ERRORS = (redis.ConnectionError, redis.TimeoutError)


class CacheService:
    """Redis-backed cache. connect() at startup, disconnect() at shutdown.

    Args:
        redis_client: Pre-built client (tests, custom pools). When given,
            the service is considered connected and connect() is a no-op.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None

    def _new_client(self) -> redis.Redis:
        s = self.settings
        return redis.Redis(
            host=s.redis_host,
            port=s.redis_port,
            db=s.redis_db,
            password=s.redis_password.get_secret_value() if s.redis_password else None,
            decode_responses=True,
            socket_connect_timeout=s.redis_socket_timeout,
            socket_timeout=s.redis_socket_timeout,
            socket_keepalive=True,
        )

    async def connect(self) -> None:
        """Open and ping a connection; on failure stay disconnected (cache off)."""
        if self.redis is not None:
            return
        client = self._new_client()
        try:
            await client.ping()
        except _CONNECTION_ERRORS as e:
            logger.warning(
                "Redis at %s:%s unreachable (%s); result cache disabled",
                self.settings.redis_host,
                self.settings.redis_port,
                e,
            )
            await client.aclose()
            return
        self.redis = client
        self._connected = True
        logger.info("Redis cache connected: %s:%s", self.settings.redis_host, self.settings.redis_port)

    async def disconnect(self) -> None:
        """Close the connection pool."""
        client, self.redis = self.redis, None
        self._connected = False
        if client is not None:
            await client.aclose()
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        return self._connected and self.redis is not None

    async def _reconnect(self) -> bool:
        """Drop the broken client and connect again. True if the new one answers PING."""
        client, self.redis = self.redis, None
        self._connected = False
        if client is not None:
            try:
                await client.aclose()
            except redis.RedisError:
                logger.debug("Ignoring error while closing broken Redis connection")
        await self.connect()
        return self.is_available()

    async def _run(
        self, op: str, key: str, command: Callable[[redis.Redis], Awaitable[T]]
    ) -> tuple[bool, T | None]:
        """Run command against Redis, reconnecting once on connection loss.

        Returns (ok, result); ok is False when the command could not run.
        """
        if not self.is_available():
            return False, None
        try:
            return True, await command(self.redis)
        except _CONNECTION_ERRORS:
            if not await self._reconnect():
                logger.warning("Cache %s skipped for %s: Redis disconnected", op, key)
                return False, None
        except redis.RedisError:
            logger.exception("Cache %s failed for %s", op, key)
            return False, None
        try:
            return True, await command(self.redis)
        except redis.RedisError:
            logger.exception("Cache %s failed for %s after reconnect", op, key)
            return False, None

    async def get(self, key: str) -> Any | None:
        """JSON-decoded value for key, or None (miss, bad JSON, or Redis down)."""
        ok, raw = await self._run("get", key, lambda r: r.get(key))
        if not ok:
            return None
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Cache value for %s is not valid JSON; treating as miss", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value as JSON for ttl seconds. False if it was not stored."""
        payload = json.dumps(value)
        ok, _ = await self._run("set", key, lambda r: r.setex(key, ttl, payload))
        if ok:
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return ok
