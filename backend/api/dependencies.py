"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its collaborators through an
interface, and this file creates the concrete implementations.

Tests swap the whole graph by overriding ``get_container`` with a
container built around in-memory stores.
"""

from typing import TYPE_CHECKING, Optional

from fastapi import Depends, FastAPI

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.codec import SessionCodec
    from modules.auth.interfaces import IIdentityStore, IOAuthProvider, ISessionStore
    from modules.auth.reconciler import AccountReconciler
    from modules.auth.sessions import SessionManager
    from modules.tasks.interfaces import ITaskService, ITaskStore


class ServiceContainer:
    """
    Container for all service instances.

    Stores and services are created lazily on first access and cached as
    singletons within the container. Any of them can be supplied up front,
    which is how tests inject fakes.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        accounts: "IIdentityStore | None" = None,
        session_store: "ISessionStore | None" = None,
        task_store: "ITaskStore | None" = None,
        oauth: "IOAuthProvider | None" = None,
    ) -> None:
        self._settings = settings
        self._accounts = accounts
        self._session_store = session_store
        self._task_store = task_store
        self._oauth = oauth
        self._session_codec: "SessionCodec | None" = None
        self._state_codec: "SessionCodec | None" = None
        self._session_manager: "SessionManager | None" = None
        self._reconciler: "AccountReconciler | None" = None
        self._task_service: "ITaskService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def accounts(self) -> "IIdentityStore":
        """Get the identity store."""
        if self._accounts is None:
            from modules.auth.repository import AccountRepository
            from shared.database import get_supabase_client
            self._accounts = AccountRepository(get_supabase_client())
        return self._accounts

    @property
    def session_store(self) -> "ISessionStore":
        """Get the session store selected by SESSION_STORE."""
        if self._session_store is None:
            if self.settings.session_store == "supabase":
                from modules.auth.repository import SessionRepository
                from shared.database import get_supabase_client
                self._session_store = SessionRepository(get_supabase_client())
            else:
                from modules.auth.session_store import InMemorySessionStore
                self._session_store = InMemorySessionStore()
        return self._session_store

    @property
    def task_store(self) -> "ITaskStore":
        """Get the task repository."""
        if self._task_store is None:
            from modules.tasks.repository import TaskRepository
            from shared.database import get_supabase_client
            self._task_store = TaskRepository(get_supabase_client())
        return self._task_store

    @property
    def oauth(self) -> "IOAuthProvider":
        """Get the OAuth exchange adapter."""
        if self._oauth is None:
            from modules.auth.oauth import GoogleOAuthAdapter
            self._oauth = GoogleOAuthAdapter(
                client_id=self.settings.google_client_id,
                client_secret=self.settings.google_client_secret,
                redirect_uri=self.settings.google_callback_url,
            )
        return self._oauth

    @property
    def session_codec(self) -> "SessionCodec":
        """Codec for the session cookie."""
        if self._session_codec is None:
            from modules.auth.codec import SessionCodec
            self._session_codec = SessionCodec(
                self.settings.session_secret,
                max_age_seconds=self.settings.session_ttl_seconds,
            )
        return self._session_codec

    @property
    def state_codec(self) -> "SessionCodec":
        """Codec for the short-lived OAuth state cookie."""
        if self._state_codec is None:
            from modules.auth.codec import STATE_SALT, SessionCodec
            self._state_codec = SessionCodec(
                self.settings.session_secret,
                max_age_seconds=self.settings.oauth_state_ttl_seconds,
                salt=STATE_SALT,
            )
        return self._state_codec

    @property
    def sessions(self) -> "SessionManager":
        """Get the session manager."""
        if self._session_manager is None:
            from modules.auth.sessions import SessionManager
            self._session_manager = SessionManager(
                store=self.session_store,
                accounts=self.accounts,
                ttl_seconds=self.settings.session_ttl_seconds,
                purge_interval_seconds=self.settings.session_purge_interval_seconds,
            )
        return self._session_manager

    @property
    def reconciler(self) -> "AccountReconciler":
        """Get the account reconciler."""
        if self._reconciler is None:
            from modules.auth.reconciler import AccountReconciler
            self._reconciler = AccountReconciler(self.accounts)
        return self._reconciler

    @property
    def tasks(self) -> "ITaskService":
        """Get the task service."""
        if self._task_service is None:
            from modules.tasks.service import TaskService
            self._task_service = TaskService(self.task_store)
        return self._task_service


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


def container_for(app: FastAPI) -> ServiceContainer:
    """
    Resolve the container outside a request dependency.

    Honors ``app.dependency_overrides`` so exception handlers and the
    lifespan see the same container as the routes.
    """
    provider = app.dependency_overrides.get(get_container, get_container)
    return provider()


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_app_settings(container: ServiceContainer = Depends(get_container)) -> Settings:
    """FastAPI dependency for settings."""
    return container.settings


def get_session_manager(container: ServiceContainer = Depends(get_container)) -> "SessionManager":
    """FastAPI dependency for the session manager."""
    return container.sessions


def get_session_codec(container: ServiceContainer = Depends(get_container)) -> "SessionCodec":
    """FastAPI dependency for the session cookie codec."""
    return container.session_codec


def get_state_codec(container: ServiceContainer = Depends(get_container)) -> "SessionCodec":
    """FastAPI dependency for the OAuth state cookie codec."""
    return container.state_codec


def get_oauth_provider(container: ServiceContainer = Depends(get_container)) -> "IOAuthProvider":
    """FastAPI dependency for the OAuth adapter."""
    return container.oauth


def get_account_reconciler(container: ServiceContainer = Depends(get_container)) -> "AccountReconciler":
    """FastAPI dependency for the account reconciler."""
    return container.reconciler


def get_task_service(container: ServiceContainer = Depends(get_container)) -> "ITaskService":
    """FastAPI dependency for the task service."""
    return container.tasks
