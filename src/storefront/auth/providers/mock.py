"""Mock provider for local development and testing.

Keeps issued session tokens in memory. Nothing is persisted, so a process
restart signs everyone out.
"""

from __future__ import annotations

import logging
import secrets
import threading

from storefront.auth.providers.base import AuthProviderBase

logger = logging.getLogger(__name__)


class MockAuthProvider(AuthProviderBase):
    """In-memory session store.

    Safe to share between request threads: the token set is only touched
    while holding the lock.
    """

    name = "mock"

    def __init__(self) -> None:
        self._tokens: set[str] = set()
        self._lock = threading.Lock()

    def issue_token(self) -> str:
        """Start a session and return its token."""
        token = secrets.token_urlsafe(24)
        with self._lock:
            self._tokens.add(token)
        return token

    def is_active(self, token: str) -> bool:
        with self._lock:
            return token in self._tokens

    def sign_out(self, token: str | None) -> bool:
        if not token:
            return False
        with self._lock:
            if token not in self._tokens:
                return False
            self._tokens.discard(token)
        logger.info("Mock session signed out")
        return True
