"""Hash service for cache fingerprints (canonical JSON + algorithm)."""

from __future__ import annotations

import hashlib
import json
from abc import ABC, abstractmethod
from typing import Any

from app.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_USERS


class HashAlgorithm(ABC):
    """Abstract hash algorithm (OCP)."""

    @abstractmethod
    def hash(self, data: str) -> str:
        """Compute hash of input string."""
        ...


class SHA256Algorithm(HashAlgorithm):
    """SHA-256 implementation."""

    def hash(self, data: str) -> str:
        return hashlib.sha256(data.encode()).hexdigest()


class HashService:
    """Single source of truth for cache key fingerprints."""

    def __init__(self, algorithm: HashAlgorithm | None = None) -> None:
        self.algorithm = algorithm or SHA256Algorithm()

    @staticmethod
    def canonical_json(data: dict[str, Any]) -> str:
        """Canonical JSON for deterministic hashing."""
        return json.dumps(data, sort_keys=True, separators=(",", ":"))

    def fingerprint(self, data: dict[str, Any]) -> str:
        """Hex digest of the canonical JSON of data."""
        return self.algorithm.hash(self.canonical_json(data))

    def users_page_key(self, search: str, page: int) -> str:
        """Cache key for one page of the user listing.

        Search and page are JSON-encoded before hashing, so no pair of
        (search, page) values can produce the same input string.
        """
        digest = self.fingerprint({"search": search, "page": page})
        return f"{CACHE_PREFIX_USERS}{CACHE_KEY_SEP}page{CACHE_KEY_SEP}{digest}"
