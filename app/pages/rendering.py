"""HTML rendering for the user listing page (Jinja2).

render_users_page is a pure function of its inputs: it never touches the
request, the store or the cache, and takes all pagination numbers from
the UserPage it is given.
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlencode

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.application.dtos.user import UserPage

_TEMPLATES_DIR = Path(__file__).parent / "templates"

_env = Environment(
    loader=FileSystemLoader(_TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

USERS_TEMPLATE = "users/index.html"
USERS_PATH = "/users"


def page_url(page: int, search: str, base_path: str = USERS_PATH) -> str:
    """Link to page of the listing, carrying the search term when set."""
    params: dict[str, str | int] = (
        {"search": search, "page": page} if search else {"page": page}
    )
    return f"{base_path}?{urlencode(params)}"


def page_links(current: int, total_pages: int, on_each_side: int = 2) -> list[int | None]:
    """Page numbers to show as links; None marks a gap ("...").

    Always includes the first and last page and on_each_side pages
    around current.

    Examples:
        >>> page_links(5, 10)
        [1, None, 3, 4, 5, 6, 7, None, 10]
    """
    if total_pages <= 0:
        return []
    start = max(1, min(current, total_pages) - on_each_side)
    end = min(total_pages, current + on_each_side)
    links: list[int | None] = []
    if start > 1:
        links.append(1)
        if start > 2:
            links.append(None)
    links.extend(range(start, end + 1))
    if end < total_pages:
        if end < total_pages - 1:
            links.append(None)
        links.append(total_pages)
    return links


def render_users_page(
    users: UserPage, search: str, *, title: str = "User List", base_path: str = USERS_PATH
) -> str:
    """Return the listing HTML: search form, user table, pagination controls.

    Args:
        users: Page of users and its pagination metadata.
        search: Current search term ('' when none); pre-fills the form and
            is carried on every pagination link.
        title: Document and heading title.
        base_path: Path the form and links point at.

    Returns:
        Complete HTML document (values autoescaped).
    """
    template = _env.get_template(USERS_TEMPLATE)
    return template.render(
        title=title,
        users=users,
        search=search,
        action=base_path,
        links=page_links(users.page, users.total_pages),
        page_url=lambda n: page_url(n, search, base_path),
    )
