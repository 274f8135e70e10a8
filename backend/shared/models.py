"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Timezone-aware current time, the default clock for services."""
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """
    Base model serialized with camelCase keys.

    Accepts both camelCase and snake_case on input so the same model
    can be built from API bodies and from database rows.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Account(CamelModel):
    """
    Local identity record bound to one external-provider subject id.

    Created by the account reconciler on first login and resolved from
    the session on every authenticated request.
    """

    id: str = Field(..., description="Account ID (UUID)")
    provider_subject: str = Field(..., description="Stable subject id from the OAuth provider")
    email: str = Field(..., description="Primary email address")
    display_name: str = Field(..., description="Display name")
    first_name: Optional[str] = Field(None, description="Given name")
    last_name: Optional[str] = Field(None, description="Family name")
    picture: Optional[str] = Field(None, description="Avatar URL")
    created_at: datetime = Field(..., description="Account creation time")
    last_login: datetime = Field(..., description="Last successful federated login")

    model_config = ConfigDict(frozen=True)
