"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import Account, CamelModel


class ExternalProfile(BaseModel):
    """
    Verified profile returned by the OAuth provider.

    Only ``subject`` and ``email`` are guaranteed; the adapter fills
    ``display_name`` with a fallback when the provider omits it.
    """

    subject: str = Field(..., min_length=1, description="Provider subject id")
    email: str = Field(..., min_length=1, description="Primary email")
    display_name: str = Field(..., description="Display name")
    first_name: Optional[str] = Field(None, description="Given name")
    last_name: Optional[str] = Field(None, description="Family name")
    picture: Optional[str] = Field(None, description="Avatar URL")

    model_config = {"frozen": True}


class SessionBinding(BaseModel):
    """Server-side record binding an opaque session handle to an account."""

    handle: str = Field(..., description="Opaque session handle (never logged)")
    account_id: str = Field(..., description="Bound account ID")
    issued_at: datetime = Field(..., description="When the session was issued")
    expires_at: datetime = Field(..., description="Fixed expiry, no sliding renewal")

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class StatusUser(CamelModel):
    """Public subset of an account shown by /auth/status."""

    id: str
    email: str
    display_name: str
    picture: Optional[str] = None

    @classmethod
    def from_account(cls, account: Account) -> "StatusUser":
        return cls(
            id=account.id,
            email=account.email,
            display_name=account.display_name,
            picture=account.picture,
        )


class AuthStatusResponse(CamelModel):
    """Response for GET /auth/status."""

    success: bool = True
    authenticated: bool
    message: Optional[str] = None
    user: Optional[StatusUser] = None


class ProfileResponse(CamelModel):
    """Response for GET /auth/profile."""

    success: bool = True
    user: Account


class MessageResponse(BaseModel):
    """Plain acknowledgement envelope."""

    success: bool = True
    message: str
