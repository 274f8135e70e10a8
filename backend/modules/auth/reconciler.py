"""
Account reconciler.

Binds a verified external profile to a durable local account.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from shared.models import Account, utcnow

from .exceptions import AccountConflictError
from .interfaces import IIdentityStore
from .models import ExternalProfile

logger = logging.getLogger(__name__)


class AccountReconciler:
    """
    Find-or-create for accounts on every successful federated login.

    Each call performs exactly one write: an update of ``last_login``
    for a known subject, or an insert for a new one.
    """

    def __init__(
        self,
        accounts: IIdentityStore,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._accounts = accounts
        self._clock = clock or utcnow

    async def reconcile(self, profile: ExternalProfile) -> Account:
        """
        Return the local account for a provider profile.

        Raises:
            AccountConflictError: If the email belongs to another subject
            AccountNotFoundError: If the account is deleted mid-login
        """
        now = self._clock()
        existing = await asyncio.to_thread(self._accounts.get_by_subject, profile.subject)

        if existing is not None:
            account = await asyncio.to_thread(
                self._accounts.update_last_login, existing.id, now
            )
            logger.info("Account %s logged in", account.id)
            return account

        data = {
            "provider_subject": profile.subject,
            "email": profile.email,
            "display_name": profile.display_name,
            "first_name": profile.first_name,
            "last_name": profile.last_name,
            "picture": profile.picture,
            "created_at": now.isoformat(),
            "last_login": now.isoformat(),
        }
        try:
            account = await asyncio.to_thread(self._accounts.create, data)
        except AccountConflictError:
            # A concurrent first login for the same subject won the insert
            winner = await asyncio.to_thread(self._accounts.get_by_subject, profile.subject)
            if winner is not None:
                logger.info("Account %s created by a concurrent login", winner.id)
                return winner
            logger.warning(
                "Login rejected: email already bound to another identity (subject=%s)",
                profile.subject,
            )
            raise

        logger.info("Created account %s for subject %s", account.id, profile.subject)
        return account
