"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.pages.
"""

from app.application.interfaces.repositories import IUserRepository
from app.application.interfaces.services import ICacheService

__all__ = [
    "ICacheService",
    "IUserRepository",
]
