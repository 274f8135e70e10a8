"""
Authentication module interfaces.

The session manager and account reconciler depend on these protocols,
never on a concrete store, so tests can inject in-memory fakes and the
session backend can be swapped by configuration.
"""

from datetime import datetime
from typing import Protocol, Optional, Any, runtime_checkable

from shared.models import Account

from .models import ExternalProfile, SessionBinding


@runtime_checkable
class IIdentityStore(Protocol):
    """
    Durable mapping from provider subject id to a local Account.

    Implementations must enforce uniqueness of ``provider_subject`` and
    ``email`` and raise AccountConflictError when an insert violates it.
    """

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Return the account with this ID, or None."""
        ...

    def get_by_subject(self, subject: str) -> Optional[Account]:
        """Return the account bound to this provider subject id, or None."""
        ...

    def create(self, data: dict[str, Any]) -> Account:
        """
        Insert a new account.

        Raises:
            AccountConflictError: If a unique identity field is taken
        """
        ...

    def update_last_login(self, account_id: str, last_login: datetime) -> Account:
        """
        Set the last-login timestamp and return the updated account.

        Raises:
            AccountNotFoundError: If no account has this id
        """
        ...


@runtime_checkable
class ISessionStore(Protocol):
    """Server-side storage for session bindings."""

    def save(self, binding: SessionBinding) -> None:
        """Persist a new binding."""
        ...

    def get(self, handle: str) -> Optional[SessionBinding]:
        """Return the binding for a handle, or None."""
        ...

    def delete(self, handle: str) -> None:
        """Remove a binding. Unknown handles are ignored."""
        ...

    def delete_expired(self, now: datetime) -> int:
        """Remove every binding that expired at or before ``now``."""
        ...


@runtime_checkable
class IOAuthProvider(Protocol):
    """Boundary to the external OAuth identity provider."""

    @property
    def is_configured(self) -> bool:
        """Whether client credentials are present."""
        ...

    def begin_login(self, state: str) -> str:
        """Build the provider authorization URL for a login attempt."""
        ...

    async def complete_login(self, code: str) -> ExternalProfile:
        """
        Exchange an authorization code for a verified profile.

        Raises:
            ProviderError: If the exchange fails or the profile is incomplete
        """
        ...
