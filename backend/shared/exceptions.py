"""
Base exception classes for the Tasker backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to an HTTP status in api/errors.py.
"""

from typing import Optional, Any


class TaskerError(Exception):
    """
    Base exception for all Tasker errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a response envelope body."""
        body: dict[str, Any] = {
            "success": False,
            "message": self.message,
            "error": self.code,
        }
        if self.details:
            body["details"] = self.details
        return body


class NotFoundError(TaskerError):
    """Resource not found (or not visible to the requester)."""

    pass


class ValidationError(TaskerError):
    """Input validation failed."""

    pass


class AuthenticationError(TaskerError):
    """Authentication failed (missing, invalid or expired session)."""

    pass


class ConflictError(TaskerError):
    """A unique constraint in the store was violated."""

    pass


class ExternalServiceError(TaskerError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
