"""Server-rendered HTML pages (user listing)."""

from app.pages.rendering import render_users_page
from app.pages.users import router

__all__ = ["render_users_page", "router"]
