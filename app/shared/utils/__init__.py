"""Shared utilities: query parameter parsing."""

from app.shared.utils.query_params import MAX_PAGE, normalize_search, parse_page

__all__ = [
    "MAX_PAGE",
    "normalize_search",
    "parse_page",
]
