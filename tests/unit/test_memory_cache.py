"""Tests for InMemoryCache (TTL expiry and value isolation)."""

from app.infrastructure.cache.memory_cache import InMemoryCache


async def test_get_missing_returns_none(memory_cache: InMemoryCache) -> None:
    assert await memory_cache.get("nope") is None


async def test_set_then_get(memory_cache: InMemoryCache) -> None:
    assert await memory_cache.set("k", {"a": [1, 2]}, ttl=60) is True
    assert await memory_cache.get("k") == {"a": [1, 2]}


async def test_expires_at_ttl(memory_cache: InMemoryCache, clock) -> None:
    await memory_cache.set("k", 1, ttl=600)
    clock.advance(599.9)
    assert await memory_cache.get("k") == 1
    clock.advance(0.1)
    assert await memory_cache.get("k") is None
    assert len(memory_cache) == 0


async def test_returns_copy(memory_cache: InMemoryCache) -> None:
    await memory_cache.set("k", {"items": []}, ttl=60)
    first = await memory_cache.get("k")
    first["items"].append("mutated")
    assert await memory_cache.get("k") == {"items": []}


async def test_overwrite_resets_ttl(memory_cache: InMemoryCache, clock) -> None:
    await memory_cache.set("k", "old", ttl=10)
    clock.advance(8)
    await memory_cache.set("k", "new", ttl=10)
    clock.advance(8)
    assert await memory_cache.get("k") == "new"


def test_always_available_and_clear(memory_cache: InMemoryCache) -> None:
    assert memory_cache.is_available()
    memory_cache.clear()
    assert len(memory_cache) == 0


async def test_set_evicts_expired_entries(memory_cache: InMemoryCache, clock) -> None:
    for n in range(1000):
        await memory_cache.set(f"users:page:{n}", n, ttl=600)
    clock.advance(601)
    await memory_cache.set("fresh", 1, ttl=600)
    assert len(memory_cache) == 1
    assert await memory_cache.get("fresh") == 1


async def test_set_keeps_live_entries(memory_cache: InMemoryCache, clock) -> None:
    await memory_cache.set("short", 1, ttl=10)
    await memory_cache.set("long", 2, ttl=600)
    clock.advance(10)
    await memory_cache.set("new", 3, ttl=600)
    assert len(memory_cache) == 2
    assert await memory_cache.get("long") == 2
