"""Tests for UserListingService (cache-aside over the user repository)."""

import pytest

from app.application.dtos.user import UserPage
from app.application.use_cases.users import UserListingService
from app.domain.exceptions import UserStoreUnavailableException


class _UnavailableCache:
    """Cache that reports itself down; get/set must not be called."""

    def is_available(self) -> bool:
        return False

    async def get(self, key: str):
        raise AssertionError("get() called on unavailable cache")

    async def set(self, key: str, value, ttl: int = 300) -> bool:
        raise AssertionError("set() called on unavailable cache")


class _FailingRepository:
    async def search_page(self, search: str, offset: int, limit: int):
        raise UserStoreUnavailableException("user search")


class TestCaching:
    """Same (search, page) within the TTL is served from the cache."""

    async def test_second_call_is_cache_hit(self, listing_service, fake_repo) -> None:
        first = await listing_service.list_users("alice", 1)
        second = await listing_service.list_users("alice", 1)
        assert first == second
        assert len(fake_repo.calls) == 1

    async def test_entry_expires_after_ttl(self, listing_service, fake_repo, clock) -> None:
        await listing_service.list_users("", 1)
        clock.advance(599)
        await listing_service.list_users("", 1)
        assert len(fake_repo.calls) == 1
        clock.advance(1)
        await listing_service.list_users("", 1)
        assert len(fake_repo.calls) == 2

    async def test_distinct_keys_per_search_and_page(self, listing_service, fake_repo) -> None:
        await listing_service.list_users("", 1)
        await listing_service.list_users("", 2)
        await listing_service.list_users("alice", 1)
        await listing_service.list_users("Alice", 1)
        assert len(fake_repo.calls) == 4

    async def test_ttl_passed_to_cache(self, fake_repo, memory_cache, clock) -> None:
        svc = UserListingService(fake_repo, memory_cache, ttl=10)
        await svc.list_users("", 1)
        clock.advance(10)
        await svc.list_users("", 1)
        assert len(fake_repo.calls) == 2

    async def test_stored_payload_is_page_dict(self, listing_service, memory_cache) -> None:
        result = await listing_service.list_users("bob", 1)
        stored = await memory_cache.get(listing_service.cache_key("bob", 1))
        assert stored == result.to_dict()

    async def test_cache_key_format(self, listing_service) -> None:
        key = listing_service.cache_key("", 1)
        prefix, kind, digest = key.split(":")
        assert (prefix, kind) == ("users", "page")
        assert len(digest) == 64


class TestQuery:
    """Offset/limit and pagination metadata."""

    async def test_offset_and_limit_from_page(self, listing_service, fake_repo) -> None:
        await listing_service.list_users("", 3)
        assert fake_repo.calls == [("", 100, 50)]

    async def test_empty_search_lists_everyone(self, listing_service) -> None:
        result = await listing_service.list_users("", 1)
        assert result.total == 120
        assert len(result.items) == 50
        assert result.total_pages == 3
        assert [u.id for u in result.items] == list(range(1, 51))

    async def test_last_partial_page(self, listing_service) -> None:
        result = await listing_service.list_users("", 3)
        assert len(result.items) == 20
        assert result.first_item == 101
        assert result.last_item == 120
        assert not result.has_next

    async def test_page_past_end_is_empty(self, listing_service) -> None:
        result = await listing_service.list_users("", 4)
        assert result.items == ()
        assert result.total == 120
        assert result.page == 4

    async def test_search_matches_email(self, listing_service) -> None:
        result = await listing_service.list_users("y.com", 1)
        assert [u.name for u in result.items] == ["Bob Jones"]

    async def test_no_match(self, listing_service) -> None:
        result = await listing_service.list_users("nobody-here", 1)
        assert result.total == 0
        assert result.total_pages == 0

    async def test_custom_page_size(self, fake_repo) -> None:
        svc = UserListingService(fake_repo, None, per_page=25)
        result = await svc.list_users("", 2)
        assert fake_repo.calls == [("", 25, 25)]
        assert result.total_pages == 5


class TestDegradedCache:
    """Cache problems fall back to the store; they never fail the request."""

    async def test_no_cache_always_queries(self, fake_repo) -> None:
        svc = UserListingService(fake_repo, None)
        await svc.list_users("", 1)
        await svc.list_users("", 1)
        assert len(fake_repo.calls) == 2

    async def test_unavailable_cache_logs_and_queries(self, fake_repo, caplog) -> None:
        svc = UserListingService(fake_repo, _UnavailableCache())
        result = await svc.list_users("alice", 1)
        assert result.total == 1
        assert len(fake_repo.calls) == 1
        assert "Result cache unavailable" in caplog.text

    async def test_malformed_entry_is_a_miss(self, listing_service, memory_cache, fake_repo) -> None:
        key = listing_service.cache_key("", 1)
        await memory_cache.set(key, {"items": "not-a-list"}, ttl=600)
        result = await listing_service.list_users("", 1)
        assert isinstance(result, UserPage)
        assert len(result.items) == 50
        assert len(fake_repo.calls) == 1
        # overwritten with a good entry
        assert await memory_cache.get(key) == result.to_dict()


async def test_store_failure_propagates(memory_cache) -> None:
    svc = UserListingService(_FailingRepository(), memory_cache)
    with pytest.raises(UserStoreUnavailableException):
        await svc.list_users("", 1)
    assert len(memory_cache) == 0
