"""
Session codec.

Turns an opaque session handle into a signed cookie value and back.
The cookie carries only the handle; the principal reference (account id)
stays server-side in the session store, keyed by the handle digest.
"""

import hashlib
import secrets
from typing import Optional

from itsdangerous import BadData, URLSafeTimedSerializer

SESSION_SALT = "tasker-session-v1"
STATE_SALT = "tasker-oauth-state-v1"


def new_handle(nbytes: int = 32) -> str:
    """Generate an unguessable URL-safe token."""
    return secrets.token_urlsafe(nbytes)


def hash_handle(handle: str) -> str:
    """Digest used as the storage key, so a leaked store holds no live handles."""
    return hashlib.sha256(handle.encode("utf-8")).hexdigest()


class SessionCodec:
    """Signs and verifies values that travel in cookies."""

    def __init__(self, secret: str, max_age_seconds: int, salt: str = SESSION_SALT):
        if not secret:
            raise ValueError("Session secret must not be empty")
        self._serializer = URLSafeTimedSerializer(secret_key=secret, salt=salt)
        self._max_age = max_age_seconds

    def dumps(self, handle: str) -> str:
        return self._serializer.dumps(handle)

    def loads(self, value: Optional[str]) -> Optional[str]:
        """Return the handle, or None when missing, tampered or too old."""
        if not value:
            return None
        try:
            handle = self._serializer.loads(value, max_age=self._max_age)
        except BadData:
            return None
        if not isinstance(handle, str) or not handle:
            return None
        return handle
