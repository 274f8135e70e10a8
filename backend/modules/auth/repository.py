"""
Auth repositories for database access.

Encapsulates all Supabase queries and data mapping for auth tables:
- accounts
- sessions
"""

from datetime import datetime
from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.models import Account
from shared.repository import BaseRepository

from .codec import hash_handle
from .exceptions import AccountConflictError, AccountNotFoundError
from .models import SessionBinding


class AccountRepository(BaseRepository[Account]):
    """
    Supabase-backed identity store.

    Unique constraints on ``provider_subject`` and ``email`` live in the
    database; violations surface as AccountConflictError.
    """

    def get_by_id(self, account_id: str) -> Optional[Account]:
        result = self._db.table("accounts").select("*").eq("id", account_id).execute()
        if not result.data:
            return None
        return self._map_to_account(result.data[0])

    def get_by_subject(self, subject: str) -> Optional[Account]:
        result = (
            self._db.table("accounts")
            .select("*")
            .eq("provider_subject", subject)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_account(result.data[0])

    def create(self, data: dict[str, Any]) -> Account:
        """
        Insert a new account row.

        Raises:
            AccountConflictError: If subject or email is already taken
        """
        try:
            result = self._db.table("accounts").insert(data).execute()
        except APIError as e:
            if self.is_unique_violation(e):
                raise AccountConflictError(data.get("email", ""), data.get("provider_subject"))
            raise
        return self._map_to_account(result.data[0])

    def update_last_login(self, account_id: str, last_login: datetime) -> Account:
        """
        Stamp a login on an existing account.

        Raises:
            AccountNotFoundError: If the account was deleted meanwhile
        """
        result = (
            self._db.table("accounts")
            .update({"last_login": last_login.isoformat()})
            .eq("id", account_id)
            .execute()
        )
        if not result.data:
            raise AccountNotFoundError(account_id, "Account no longer exists")
        return self._map_to_account(result.data[0])

    def _map_to_account(self, data: dict[str, Any]) -> Account:
        """Map database row to Account model."""
        return Account(
            id=str(data["id"]),
            provider_subject=data["provider_subject"],
            email=data["email"],
            display_name=data["display_name"],
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            picture=data.get("picture"),
            created_at=data["created_at"],
            last_login=data["last_login"],
        )


class SessionRepository(BaseRepository[SessionBinding]):
    """
    Supabase-backed session store.

    Rows are keyed by the SHA-256 digest of the handle. The raw handle
    is only ever known to the client and to the request holding it.
    """

    def save(self, binding: SessionBinding) -> None:
        self._db.table("sessions").insert(
            {
                "id": hash_handle(binding.handle),
                "account_id": binding.account_id,
                "issued_at": binding.issued_at.isoformat(),
                "expires_at": binding.expires_at.isoformat(),
            }
        ).execute()

    def get(self, handle: str) -> Optional[SessionBinding]:
        result = (
            self._db.table("sessions")
            .select("*")
            .eq("id", hash_handle(handle))
            .execute()
        )
        if not result.data:
            return None
        row = result.data[0]
        return SessionBinding(
            handle=handle,
            account_id=str(row["account_id"]),
            issued_at=row["issued_at"],
            expires_at=row["expires_at"],
        )

    def delete(self, handle: str) -> None:
        self._db.table("sessions").delete().eq("id", hash_handle(handle)).execute()

    def delete_expired(self, now: datetime) -> int:
        result = (
            self._db.table("sessions")
            .delete()
            .lte("expires_at", now.isoformat())
            .execute()
        )
        return len(result.data or [])
