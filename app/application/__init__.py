"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (user repository, cache).
"""

from app.application.interfaces import ICacheService, IUserRepository
from app.application.services.hash_service import HashService
from app.application.use_cases.users import UserListingService

__all__ = [
    "HashService",
    "ICacheService",
    "IUserRepository",
    "UserListingService",
]
