"""Domain layer: exceptions shared by application and infrastructure.

No dependencies on infrastructure or presentation.
"""

from app.domain.exceptions import (
    DirectoryException,
    UserStoreUnavailableException,
)

__all__ = [
    "DirectoryException",
    "UserStoreUnavailableException",
]
