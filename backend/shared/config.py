"""
Centralized configuration for the Tasker backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., GOOGLE_*, SESSION_*).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Tasker API"
    app_version: str = "1.0.0"
    environment: Literal["development", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # Direct Postgres URL, used by run_migrations.py

    # Google OAuth
    google_client_id: str = ""
    google_client_secret: str = ""
    google_callback_url: str = "http://localhost:3000/auth/login/callback"

    # Sessions
    session_secret: str = "dev-only-session-secret-change-me"
    session_ttl_seconds: int = 24 * 60 * 60
    session_purge_interval_seconds: int = 15 * 60
    session_cookie_name: str = "tasker_session"
    session_store: Literal["memory", "supabase"] = "memory"
    oauth_state_ttl_seconds: int = 600

    # Redirect targets
    login_url: str = "/auth/login"
    login_success_redirect: str = "/dashboard"
    login_failure_redirect: str = "/login-failed"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def cookie_secure(self) -> bool:
        """Secure cookies are only sent over HTTPS, so dev keeps them off."""
        return self.is_production

    @property
    def cookie_samesite(self) -> str:
        return "strict" if self.is_production else "lax"

    @property
    def google_configured(self) -> bool:
        return bool(self.google_client_id and self.google_client_secret)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
