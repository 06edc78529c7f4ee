"""HTTP tests for the listing pages (GET / and GET /users)."""

from httpx import AsyncClient

from app.api.v1.dependencies import get_user_listing_service
from app.application.use_cases.users import UserListingService
from app.domain.exceptions import UserStoreUnavailableException
from app.main import app
from app.shared.utils.query_params import MAX_PAGE


async def test_root_redirects_to_users(client: AsyncClient) -> None:
    response = await client.get("/")
    assert response.status_code == 302
    assert response.headers["location"] == "/users"


async def test_users_returns_html(client: AsyncClient) -> None:
    response = await client.get("/users")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert response.text.count('class="user-row"') == 50
    assert "Showing 1 to 50 of 120 results" in response.text


async def test_search_filters_rows(client: AsyncClient) -> None:
    response = await client.get("/users", params={"search": "alice"})
    assert response.status_code == 200
    assert response.text.count('class="user-row"') == 1
    assert "Alice Smith" in response.text
    assert 'name="search" value="alice"' in response.text


async def test_search_is_trimmed(client: AsyncClient, fake_repo) -> None:
    await client.get("/users", params={"search": "  bob  "})
    assert fake_repo.calls == [("bob", 0, 50)]


async def test_page_param(client: AsyncClient, fake_repo) -> None:
    response = await client.get("/users", params={"page": "3"})
    assert response.text.count('class="user-row"') == 20
    assert fake_repo.calls == [("", 100, 50)]


async def test_invalid_page_falls_back_to_first(client: AsyncClient, fake_repo) -> None:
    for raw in ("abc", "0", "-1", "1.5"):
        response = await client.get("/users", params={"page": raw})
        assert response.status_code == 200
    # all four are page 1 of the same search: one store query, then cache hits
    assert fake_repo.calls == [("", 0, 50)]


async def test_page_past_end_renders_empty_table(client: AsyncClient) -> None:
    response = await client.get("/users", params={"page": "99"})
    assert response.status_code == 200
    assert "No users found." in response.text


async def test_repeat_request_served_from_cache(client: AsyncClient, fake_repo) -> None:
    first = await client.get("/users", params={"search": "user", "page": "2"})
    second = await client.get("/users", params={"search": "user", "page": "2"})
    assert first.text == second.text
    assert len(fake_repo.calls) == 1


async def test_store_failure_returns_503_json(client: AsyncClient) -> None:
    class _DownRepository:
        async def search_page(self, search, offset, limit):
            raise UserStoreUnavailableException("user search")

    app.dependency_overrides[get_user_listing_service] = lambda: UserListingService(
        _DownRepository(), None
    )
    response = await client.get("/users")
    assert response.status_code == 503
    assert response.headers["content-type"].startswith("application/json")
    assert response.json()["error"] == "USER_STORE_UNAVAILABLE"
    assert "<table" not in response.text


async def test_security_headers_and_request_id(client: AsyncClient) -> None:
    response = await client.get("/users", headers={"X-Request-ID": "req-123"})
    assert response.headers["x-request-id"] == "req-123"
    assert response.headers["x-content-type-options"] == "nosniff"
    assert "frame-ancestors 'none'" in response.headers["content-security-policy"]


async def test_very_long_page_number_is_capped(client: AsyncClient, fake_repo) -> None:
    response = await client.get("/users", params={"page": "9" * 5000})
    assert response.status_code == 200
    assert "No users found." in response.text
    assert fake_repo.calls == [("", (MAX_PAGE - 1) * 50, 50)]
