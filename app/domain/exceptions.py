"""Domain errors for the user directory.

Raised by the application and persistence layers; app.core.exception_handlers
turns them into JSON responses, choosing the HTTP status from error_code.
"""

from typing import Any


class DirectoryException(Exception):
    """Root of the directory's error hierarchy.

    Attributes:
        message: Text shown to the client.
        error_code: Stable machine-readable code (class name unless given).
        details: Extra JSON-serializable context, omitted when empty.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """JSON error body: error, message and (if any) details."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class UserStoreUnavailableException(DirectoryException):
    """The user store could not answer (connection lost, query failed, timeout)."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"User store unavailable during {operation}",
            "USER_STORE_UNAVAILABLE",
            {"operation": operation},
        )

