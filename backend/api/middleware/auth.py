"""
Session authentication guard.

Resolves the session cookie into an Account for protected routes and
rejects the request before the handler runs when that fails.
"""

import logging
from typing import Optional

from fastapi import Depends, Request

from shared.exceptions import AuthenticationError
from shared.models import Account
from modules.auth.codec import SessionCodec
from modules.auth.exceptions import AlreadyAuthenticatedError, InvalidSessionError
from modules.auth.sessions import SessionManager

from ..dependencies import ServiceContainer, get_container, get_session_codec, get_session_manager

logger = logging.getLogger(__name__)


def read_session_handle(request: Request, cookie_name: str, codec: SessionCodec) -> Optional[str]:
    """
    Extract the session handle from the request cookie.

    Returns None when no cookie is sent.

    Raises:
        InvalidSessionError: If a cookie is present but fails verification
    """
    raw = request.cookies.get(cookie_name)
    if not raw:
        return None
    handle = codec.loads(raw)
    if handle is None:
        raise InvalidSessionError()
    return handle


async def get_current_account(
    request: Request,
    container: ServiceContainer = Depends(get_container),
    sessions: SessionManager = Depends(get_session_manager),
    codec: SessionCodec = Depends(get_session_codec),
) -> Account:
    """
    Dependency that requires a valid session.

    Use this for endpoints that require a logged-in account. The
    error handler turns the raised AuthenticationError into a 401 with
    a login entry point.

    Usage:
        @router.get("/protected")
        async def protected_route(account: Account = Depends(get_current_account)):
            return {"account_id": account.id}
    """
    handle = read_session_handle(request, container.settings.session_cookie_name, codec)
    return await sessions.validate(handle)


async def get_optional_account(
    request: Request,
    container: ServiceContainer = Depends(get_container),
    sessions: SessionManager = Depends(get_session_manager),
    codec: SessionCodec = Depends(get_session_codec),
) -> Optional[Account]:
    """
    Dependency that optionally resolves the account.

    Use this for endpoints that work with or without a session. Any
    failure, including an unreachable store, resolves to anonymous.
    """
    try:
        handle = read_session_handle(request, container.settings.session_cookie_name, codec)
        return await sessions.validate(handle)
    except AuthenticationError:
        return None
    except Exception:
        logger.exception("Session lookup failed; treating request as anonymous")
        return None


async def require_guest(
    container: ServiceContainer = Depends(get_container),
    account: Optional[Account] = Depends(get_optional_account),
) -> None:
    """
    Dependency for login-only routes.

    An already authenticated caller is sent to the landing route instead
    of starting another OAuth handshake.
    """
    if account is not None:
        raise AlreadyAuthenticatedError(container.settings.login_success_redirect)


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_account)
OptionalAuth = Depends(get_optional_account)
