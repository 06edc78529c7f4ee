"""User listing pages: GET / (redirect) and GET /users (HTML)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from app.api.v1.dependencies import get_user_listing_service
from app.application.use_cases.users import UserListingService
from app.pages.rendering import USERS_PATH, render_users_page
from app.shared.utils.query_params import normalize_search, parse_page

router = APIRouter()


@router.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    """Send visitors to the user listing."""
    return RedirectResponse(url=USERS_PATH, status_code=302)


@router.get(USERS_PATH, response_class=HTMLResponse, name="users.index")
async def list_users(
    listing: Annotated[UserListingService, Depends(get_user_listing_service)],
    search: Annotated[str | None, Query(description="Name or email substring")] = None,
    page: Annotated[str | None, Query(description="1-based page number")] = None,
) -> HTMLResponse:
    """Searchable, paginated user table.

    page is accepted as a raw string; anything that is not a positive
    integer is treated as page 1.
    """
    term = normalize_search(search)
    result = await listing.list_users(search=term, page=parse_page(page))
    return HTMLResponse(content=render_users_page(result, term))
