"""
Authentication module.

Handles the Google login handshake, local account binding and
server-side sessions.

Public API:
- IIdentityStore, ISessionStore, IOAuthProvider: Collaborator interfaces
- SessionManager: Issue, validate and revoke sessions
- AccountReconciler: Find-or-create accounts from provider profiles
- ExternalProfile, SessionBinding: Auth data
- Auth exceptions: ProviderError, AccountConflictError, session errors
"""

from .interfaces import IIdentityStore, ISessionStore, IOAuthProvider
from .models import ExternalProfile, SessionBinding
from .reconciler import AccountReconciler
from .sessions import SessionManager
from .exceptions import (
    ProviderError,
    AccountConflictError,
    MissingSessionError,
    InvalidSessionError,
    ExpiredSessionError,
    AccountNotFoundError,
    AlreadyAuthenticatedError,
)

__all__ = [
    # Interfaces
    "IIdentityStore",
    "ISessionStore",
    "IOAuthProvider",
    # Services
    "SessionManager",
    "AccountReconciler",
    # Models
    "ExternalProfile",
    "SessionBinding",
    # Exceptions
    "ProviderError",
    "AccountConflictError",
    "MissingSessionError",
    "InvalidSessionError",
    "ExpiredSessionError",
    "AccountNotFoundError",
    "AlreadyAuthenticatedError",
]
