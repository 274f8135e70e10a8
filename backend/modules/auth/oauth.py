"""
Google OAuth 2.0 exchange adapter.

Wraps the authorization-code handshake: builds the consent redirect and
turns the provider callback into a verified ExternalProfile. Performs no
persistence.
"""

import logging
from typing import Any, Optional
from urllib.parse import urlencode

import httpx

from .exceptions import ProviderError
from .models import ExternalProfile

logger = logging.getLogger(__name__)

AUTHORIZATION_ENDPOINT = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"
USERINFO_ENDPOINT = "https://openidconnect.googleapis.com/v1/userinfo"

# Identity + email only
SCOPES = ("openid", "email", "profile")


class GoogleOAuthAdapter:
    """
    Implementation of IOAuthProvider for Google.

    Example:
        adapter = GoogleOAuthAdapter(client_id, client_secret, redirect_uri)
        url = adapter.begin_login(state)
        ...
        profile = await adapter.complete_login(code)
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 10.0,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._redirect_uri = redirect_uri
        self._timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self._client_id and self._client_secret)

    def begin_login(self, state: str) -> str:
        """Build the consent screen URL for this login attempt."""
        if not self.is_configured:
            raise ProviderError("Google OAuth is not configured", reason="not_configured")

        params = {
            "client_id": self._client_id,
            "redirect_uri": self._redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "state": state,
            "access_type": "online",
            "prompt": "select_account",
        }
        return f"{AUTHORIZATION_ENDPOINT}?{urlencode(params)}"

    async def complete_login(self, code: str) -> ExternalProfile:
        """
        Exchange an authorization code for a verified profile.

        Args:
            code: Authorization code from the provider callback

        Returns:
            ExternalProfile with at least subject id and email

        Raises:
            ProviderError: If the exchange fails, the code is rejected,
                or the profile lacks a subject id or email
        """
        if not self.is_configured:
            raise ProviderError("Google OAuth is not configured", reason="not_configured")
        if not code:
            raise ProviderError("Missing authorization code", reason="missing_code")

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                access_token = await self._exchange_code(client, code)
                userinfo = await self._fetch_userinfo(client, access_token)
        except httpx.HTTPError as e:
            logger.warning("Google OAuth request failed: %s", e.__class__.__name__)
            raise ProviderError("Could not reach identity provider", reason="transport_error")

        return self._map_to_profile(userinfo)

    async def _exchange_code(self, client: httpx.AsyncClient, code: str) -> str:
        response = await client.post(
            TOKEN_ENDPOINT,
            data={
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self._redirect_uri,
            },
            headers={"Accept": "application/json"},
        )
        if response.status_code >= 400:
            # Invalid or expired codes come back as 400 invalid_grant
            raise ProviderError(
                f"Token exchange failed (status={response.status_code})",
                reason="token_exchange_failed",
            )
        tokens = self._json(response)
        access_token = tokens.get("access_token")
        if not access_token:
            raise ProviderError("Token response missing access_token", reason="invalid_token_response")
        return str(access_token)

    async def _fetch_userinfo(self, client: httpx.AsyncClient, access_token: str) -> dict[str, Any]:
        response = await client.get(
            USERINFO_ENDPOINT,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if response.status_code >= 400:
            raise ProviderError(
                f"Profile request failed (status={response.status_code})",
                reason="profile_request_failed",
            )
        return self._json(response)

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            raise ProviderError("Provider returned invalid JSON", reason="invalid_response")
        if not isinstance(data, dict):
            raise ProviderError("Provider returned invalid JSON", reason="invalid_response")
        return data

    @staticmethod
    def _map_to_profile(userinfo: dict[str, Any]) -> ExternalProfile:
        subject = _clean(userinfo.get("sub"))
        email = _clean(userinfo.get("email"))
        if not subject or not email:
            raise ProviderError("Provider profile missing subject id or email", reason="incomplete_profile")

        # Google omits email_verified for some workspace accounts
        if userinfo.get("email_verified") is False:
            raise ProviderError("Provider email is not verified", reason="unverified_email")

        display_name = _clean(userinfo.get("name")) or email.split("@", 1)[0]
        return ExternalProfile(
            subject=subject,
            email=email.lower(),
            display_name=display_name,
            first_name=_clean(userinfo.get("given_name")),
            last_name=_clean(userinfo.get("family_name")),
            picture=_clean(userinfo.get("picture")),
        )


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
