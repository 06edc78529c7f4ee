"""Application services: stateless helpers used by use cases."""

from app.application.services.hash_service import (
    HashAlgorithm,
    HashService,
    SHA256Algorithm,
)

__all__ = [
    "HashAlgorithm",
    "HashService",
    "SHA256Algorithm",
]
