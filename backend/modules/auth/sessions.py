"""
Session manager.

Issues, validates and revokes server-side sessions. A session moves
Issued -> Valid -> Invalid and never comes back from Invalid: expired
and orphaned bindings are deleted when they are detected.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from shared.models import Account, utcnow

from .codec import new_handle
from .exceptions import (
    AccountNotFoundError,
    ExpiredSessionError,
    InvalidSessionError,
    MissingSessionError,
)
from .interfaces import IIdentityStore, ISessionStore
from .models import SessionBinding

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Server-side session lifecycle with a fixed time-to-live.

    Validation never renews expiry and is never cached; every request
    goes back to the session store and the identity store.
    """

    def __init__(
        self,
        store: ISessionStore,
        accounts: IIdentityStore,
        ttl_seconds: int,
        clock: Optional[Callable[[], datetime]] = None,
        purge_interval_seconds: Optional[int] = None,
    ):
        if ttl_seconds <= 0:
            raise ValueError("Session TTL must be positive")
        self._store = store
        self._accounts = accounts
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or utcnow
        # Bindings whose cookie never comes back are swept from issue()
        self._purge_interval = timedelta(seconds=purge_interval_seconds or ttl_seconds)
        self._next_purge: Optional[datetime] = None

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    async def issue(self, account_id: str) -> SessionBinding:
        """
        Create a new session for an account and return its binding.

        At most once per purge interval, expired bindings are dropped
        first so the store stays bounded on a long-running server.
        """
        now = self._clock()
        if self._next_purge is None or now >= self._next_purge:
            self._next_purge = now + self._purge_interval
            await self.purge_expired()

        binding = SessionBinding(
            handle=new_handle(),
            account_id=account_id,
            issued_at=now,
            expires_at=now + self._ttl,
        )
        await asyncio.to_thread(self._store.save, binding)
        logger.info("Issued session for account %s", account_id)
        return binding

    async def validate(self, handle: Optional[str]) -> Account:
        """
        Resolve a session handle to its account.

        Raises:
            MissingSessionError: If no handle was supplied
            InvalidSessionError: If the handle is unknown or revoked
            ExpiredSessionError: If the session is past its TTL
            AccountNotFoundError: If the bound account no longer exists
        """
        if not handle:
            raise MissingSessionError()

        binding = await asyncio.to_thread(self._store.get, handle)
        if binding is None:
            raise InvalidSessionError()

        if binding.is_expired(self._clock()):
            await asyncio.to_thread(self._store.delete, handle)
            raise ExpiredSessionError()

        account = await asyncio.to_thread(self._accounts.get_by_id, binding.account_id)
        if account is None:
            await asyncio.to_thread(self._store.delete, handle)
            logger.warning("Dropped session bound to missing account %s", binding.account_id)
            raise AccountNotFoundError(binding.account_id)

        return account

    async def revoke(self, handle: Optional[str]) -> None:
        """Delete a session. Revoking an unknown or missing handle is a no-op."""
        if not handle:
            return
        await asyncio.to_thread(self._store.delete, handle)

    async def purge_expired(self) -> int:
        """Remove every expired binding and return how many were dropped."""
        removed = await asyncio.to_thread(self._store.delete_expired, self._clock())
        if removed:
            logger.info("Purged %d expired session(s)", removed)
        return removed
