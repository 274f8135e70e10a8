"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import (
    TaskerError,
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
)


class ProviderError(ExternalServiceError):
    """Raised when the OAuth exchange with the identity provider fails."""

    def __init__(
        self,
        message: str,
        reason: str = "exchange_failed",
        provider: str = "google",
    ):
        super().__init__(
            message,
            service=provider,
            code="PROVIDER_ERROR",
            details={"reason": reason},
        )
        self.reason = reason


class AccountConflictError(ConflictError):
    """Raised when a new account collides with an existing identity."""

    def __init__(self, email: str, subject: Optional[str] = None):
        super().__init__(
            f"An account with email {email} is already bound to another identity",
            code="ACCOUNT_CONFLICT",
            details={"email": email, "subject": subject},
        )


class MissingSessionError(AuthenticationError):
    """Raised when the request carries no session handle."""

    def __init__(self, message: str = "Authentication required. Please login first."):
        super().__init__(message, code="MISSING_SESSION")


class InvalidSessionError(AuthenticationError):
    """Raised when the session handle is unknown, tampered or revoked."""

    def __init__(self, message: str = "Session is invalid. Please login again."):
        super().__init__(message, code="INVALID_SESSION")


class ExpiredSessionError(AuthenticationError):
    """Raised when the session outlived its time-to-live."""

    def __init__(self, message: str = "Session has expired. Please login again."):
        super().__init__(message, code="SESSION_EXPIRED")


class AccountNotFoundError(AuthenticationError):
    """Raised when a session or a login refers to an account that no longer exists."""

    def __init__(self, account_id: str, message: str = "Account for this session no longer exists"):
        super().__init__(
            message,
            code="ACCOUNT_NOT_FOUND",
            details={"account_id": account_id},
        )


class AlreadyAuthenticatedError(TaskerError):
    """Raised by the guest-only gate when a valid session is present."""

    def __init__(self, redirect_to: str):
        super().__init__(
            "Already authenticated",
            code="ALREADY_AUTHENTICATED",
            details={"redirect_to": redirect_to},
        )
        self.redirect_to = redirect_to
