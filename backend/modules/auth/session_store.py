"""
In-process session store.

The default backend for development and single-worker deployments.
Bindings live in a dict guarded by a lock, since store calls run in
worker threads. Use SESSION_STORE=supabase when running several workers.
"""

import threading
from datetime import datetime
from typing import Optional

from .codec import hash_handle
from .models import SessionBinding


class InMemorySessionStore:
    """Dict-backed implementation of ISessionStore."""

    def __init__(self) -> None:
        self._bindings: dict[str, SessionBinding] = {}
        self._lock = threading.Lock()

    def save(self, binding: SessionBinding) -> None:
        with self._lock:
            self._bindings[hash_handle(binding.handle)] = binding

    def get(self, handle: str) -> Optional[SessionBinding]:
        with self._lock:
            return self._bindings.get(hash_handle(handle))

    def delete(self, handle: str) -> None:
        with self._lock:
            self._bindings.pop(hash_handle(handle), None)

    def delete_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [key for key, b in self._bindings.items() if b.is_expired(now)]
            for key in expired:
                del self._bindings[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._bindings)
