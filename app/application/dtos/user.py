"""DTOs for the user listing (no dependency on ORM).

UserPage is what the cache stores: to_dict()/from_dict() must round-trip
exactly so a cached page renders identically to a freshly queried one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class UserResult:
    """User read-model (id, name, email, phone)."""

    id: int
    name: str
    email: str
    phone: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserResult:
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            email=str(data["email"]),
            phone=str(data["phone"]),
        )


@dataclass(frozen=True)
class UserPage:
    """One page of users plus pagination metadata.

    Attributes:
        items: Users on this page, in storage order.
        total: Number of users matching the search across all pages.
        page: 1-based page number that was requested.
        per_page: Page size used for the query.
    """

    items: tuple[UserResult, ...] = field(default_factory=tuple)
    total: int = 0
    page: int = 1
    per_page: int = 50

    @property
    def total_pages(self) -> int:
        """Number of pages (0 when nothing matches)."""
        return math.ceil(self.total / self.per_page) if self.total else 0

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def first_item(self) -> int:
        """1-based position of the first row on this page (0 when empty)."""
        return self.offset + 1 if self.items else 0

    @property
    def last_item(self) -> int:
        """1-based position of the last row on this page (0 when empty)."""
        return self.offset + len(self.items) if self.items else 0

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form for the result cache."""
        return {
            "items": [u.to_dict() for u in self.items],
            "total": self.total,
            "page": self.page,
            "per_page": self.per_page,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserPage:
        """Rebuild a page from to_dict() output. Raises KeyError/TypeError/ValueError if malformed."""
        return cls(
            items=tuple(UserResult.from_dict(row) for row in data["items"]),
            total=int(data["total"]),
            page=int(data["page"]),
            per_page=int(data["per_page"]),
        )
