"""
Authentication API endpoints.

Drives the Google login handshake and exposes session status.
"""

import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import RedirectResponse

from api.dependencies import (
    get_account_reconciler,
    get_app_settings,
    get_oauth_provider,
    get_session_codec,
    get_session_manager,
    get_state_codec,
)
from api.middleware.auth import OptionalAuth, RequireAuth, require_guest
from shared.config import Settings
from shared.models import Account

from .codec import SessionCodec, new_handle
from .exceptions import AccountConflictError, AccountNotFoundError, ProviderError
from .interfaces import IOAuthProvider
from .models import AuthStatusResponse, MessageResponse, ProfileResponse, StatusUser
from .reconciler import AccountReconciler
from .sessions import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter()

OAUTH_STATE_COOKIE = "tasker_oauth_state"


def session_cookie_kwargs(settings: Settings, value: str) -> dict:
    return {
        "key": settings.session_cookie_name,
        "value": value,
        "max_age": settings.session_ttl_seconds,
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": settings.cookie_samesite,
        "path": "/",
    }


def state_cookie_kwargs(settings: Settings, value: str) -> dict:
    # Lax even in production: the provider redirect back is a cross-site navigation
    return {
        "key": OAUTH_STATE_COOKIE,
        "value": value,
        "max_age": settings.oauth_state_ttl_seconds,
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": "lax",
        "path": "/auth",
    }


def failure_redirect(settings: Settings) -> RedirectResponse:
    response = RedirectResponse(settings.login_failure_redirect, status_code=302)
    response.delete_cookie(OAUTH_STATE_COOKIE, path="/auth")
    return response


@router.get("/login", dependencies=[Depends(require_guest)])
async def login(
    settings: Settings = Depends(get_app_settings),
    oauth: IOAuthProvider = Depends(get_oauth_provider),
    state_codec: SessionCodec = Depends(get_state_codec),
) -> RedirectResponse:
    """
    Start the Google login.

    Redirects to the consent screen. Already authenticated callers are
    sent to the dashboard instead.
    """
    state = new_handle(16)
    try:
        url = oauth.begin_login(state)
    except ProviderError as e:
        logger.error("Cannot start login: %s", e.message)
        return failure_redirect(settings)

    response = RedirectResponse(url, status_code=302)
    response.set_cookie(**state_cookie_kwargs(settings, state_codec.dumps(state)))
    return response


@router.get("/login/callback")
async def login_callback(
    request: Request,
    code: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None),
    error: Optional[str] = Query(default=None),
    settings: Settings = Depends(get_app_settings),
    oauth: IOAuthProvider = Depends(get_oauth_provider),
    reconciler: AccountReconciler = Depends(get_account_reconciler),
    sessions: SessionManager = Depends(get_session_manager),
    session_codec: SessionCodec = Depends(get_session_codec),
    state_codec: SessionCodec = Depends(get_state_codec),
) -> RedirectResponse:
    """
    Finish the Google login.

    On success the session cookie is set and the caller lands on the
    dashboard; any provider or identity failure lands on /login-failed.
    """
    expected_state = state_codec.loads(request.cookies.get(OAUTH_STATE_COOKIE))
    try:
        if error:
            raise ProviderError(f"Provider returned error: {error}", reason="access_denied")
        if not state or not expected_state or not secrets.compare_digest(state, expected_state):
            raise ProviderError("OAuth state mismatch", reason="state_mismatch")
        profile = await oauth.complete_login(code or "")
        account = await reconciler.reconcile(profile)
    except (ProviderError, AccountConflictError, AccountNotFoundError) as e:
        logger.warning("Login failed (%s): %s", e.code, e.message)
        return failure_redirect(settings)

    # Never reuse a handle that existed before authentication
    previous = session_codec.loads(request.cookies.get(settings.session_cookie_name))
    await sessions.revoke(previous)

    binding = await sessions.issue(account.id)
    response = RedirectResponse(settings.login_success_redirect, status_code=302)
    response.set_cookie(**session_cookie_kwargs(settings, session_codec.dumps(binding.handle)))
    response.delete_cookie(OAUTH_STATE_COOKIE, path="/auth")
    return response


@router.get("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_app_settings),
    sessions: SessionManager = Depends(get_session_manager),
    session_codec: SessionCodec = Depends(get_session_codec),
) -> MessageResponse:
    """Revoke the current session. Succeeds even without one."""
    handle = session_codec.loads(request.cookies.get(settings.session_cookie_name))
    await sessions.revoke(handle)

    response.delete_cookie(
        settings.session_cookie_name,
        path="/",
        secure=settings.cookie_secure,
        httponly=True,
        samesite=settings.cookie_samesite,
    )
    return MessageResponse(message="Logged out successfully")


@router.get("/status", response_model=AuthStatusResponse, response_model_exclude_none=True)
async def auth_status(account: Optional[Account] = OptionalAuth) -> AuthStatusResponse:
    """Report whether the caller is authenticated. Never fails."""
    if account is None:
        return AuthStatusResponse(authenticated=False, message="Not authenticated")
    return AuthStatusResponse(authenticated=True, user=StatusUser.from_account(account))


@router.get("/profile", response_model=ProfileResponse)
async def profile(account: Account = RequireAuth) -> ProfileResponse:
    """Full profile of the current account."""
    return ProfileResponse(user=account)
