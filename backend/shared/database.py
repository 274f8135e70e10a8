"""
Supabase client factory.

The backend connects with the service role only. Row level security is
not relied on; repositories and services filter by owner themselves.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Return the process-wide service-role client, creating it on first use.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    global _client

    if _client is None:
        settings = get_settings()
        if not (settings.supabase_url and settings.supabase_service_role_key):
            raise RuntimeError(
                "Supabase configuration missing: set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY."
            )
        _client = create_client(settings.supabase_url, settings.supabase_service_role_key)

    return _client


def reset_client_cache() -> None:
    """Drop the cached client so the next call rebuilds it from settings."""
    global _client
    _client = None
