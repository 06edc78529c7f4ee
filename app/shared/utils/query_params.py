"""Query parameter parsing for the listing page.

Parsing is explicit and total: malformed input falls back to a default
instead of producing a validation error.
"""

import re

# Leading zeros are dropped from the captured digits.
_DIGITS = re.compile(r"^\+?0*([0-9]+)$")

# OFFSET must fit a signed 64-bit integer.
MAX_PAGE = 10**9


def parse_page(raw: str | None, default: int = 1) -> int:
    """Parse a 1-based page number.

    Missing, non-numeric, zero and negative values return default;
    values above MAX_PAGE are capped.

    Examples:
        >>> parse_page("3")
        3
        >>> parse_page("-2")
        1
        >>> parse_page("abc")
        1
        >>> parse_page("9" * 5000) == MAX_PAGE
        True
    """
    if raw is None:
        return default
    value = raw.strip()
    match = _DIGITS.match(value)
    if match is None:
        return default
    digits = match.group(1)
    # Longer runs exceed MAX_PAGE; int() also rejects very long strings.
    if len(digits) > len(str(MAX_PAGE)):
        return MAX_PAGE
    page = int(digits)
    if page < 1:
        return default
    return min(page, MAX_PAGE)


def normalize_search(raw: str | None) -> str:
    """Return the search term with surrounding whitespace trimmed ('' when absent)."""
    if raw is None:
        return ""
    return raw.strip()
