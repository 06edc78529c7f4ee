"""Pytest configuration and fixtures for the user directory.

Env is set before app.main is imported: an in-memory SQLite URL (so
Settings validate and the readiness probe has a store to ping) and the
memory cache backend. HTTP tests override get_user_listing_service with
an in-process repository; repository tests get a real SQLite session.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("TELEMETRY_ENABLED", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.v1.dependencies import get_user_listing_service
from app.application.dtos.user import UserResult
from app.application.use_cases.users import UserListingService
from app.infrastructure.cache.memory_cache import InMemoryCache
from app.infrastructure.persistence import models  # noqa: F401  (registers tables)
from app.infrastructure.persistence.database import Base
from app.main import app


class FakeClock:
    """Settable monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUserRepository:
    """In-process IUserRepository: case-insensitive name/email substring match, id order."""

    def __init__(self, users: list[UserResult] | None = None) -> None:
        self.users = sorted(users or [], key=lambda u: u.id)
        self.calls: list[tuple[str, int, int]] = []

    async def search_page(
        self, search: str, offset: int, limit: int
    ) -> tuple[list[UserResult], int]:
        self.calls.append((search, offset, limit))
        term = search.casefold()
        matched = [
            u
            for u in self.users
            if not term or term in u.name.casefold() or term in u.email.casefold()
        ]
        return matched[offset : offset + limit], len(matched)


def make_users(count: int, start: int = 1) -> list[UserResult]:
    """count sequential users with ids from start."""
    return [
        UserResult(
            id=i,
            name=f"User {i:03d}",
            email=f"user{i:03d}@example.com",
            phone=f"555-{i:04d}",
        )
        for i in range(start, start + count)
    ]


@pytest.fixture
def user_factory():
    """The make_users helper, for tests that build their own repository."""
    return make_users


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_cache(clock: FakeClock) -> InMemoryCache:
    return InMemoryCache(clock=clock)


@pytest.fixture
def fake_repo() -> FakeUserRepository:
    """Repository with Alice, Bob and 118 generated users (120 total)."""
    return FakeUserRepository(
        [
            UserResult(id=1, name="Alice Smith", email="alice@example.com", phone="555-0001"),
            UserResult(id=2, name="Bob Jones", email="bob@y.com", phone="555-0002"),
            *make_users(118, start=3),
        ]
    )


@pytest.fixture
def listing_service(
    fake_repo: FakeUserRepository, memory_cache: InMemoryCache
) -> UserListingService:
    return UserListingService(fake_repo, memory_cache)


@pytest.fixture
async def client(listing_service: UserListingService) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), listing backed by fake_repo."""
    app.dependency_overrides[get_user_listing_service] = lambda: listing_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def db_session() -> AsyncSession:
    """SQLite session with the schema created; discarded after the test.

    Use @pytest.mark.requires_db on tests that need this fixture; run
    without aiosqlite via: pytest -m 'not requires_db'.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(bind=engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()
