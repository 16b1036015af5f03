"""Base authentication provider interface.

Providers implement a narrow interface: sign_out(token) -> bool.
They must not shape HTTP responses; route handlers translate their
results and errors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AuthProviderBase(ABC):
    """Abstract base class for authentication/session providers."""

    name: str = "base"

    @abstractmethod
    def sign_out(self, token: str | None) -> bool:
        """End the session identified by token.

        Args:
            token: Session token supplied by the client, if any.

        Returns:
            True if a session was ended, False if there was none to end.

        Raises:
            CapabilityDisabledError: If authentication is switched off.
        """
        pass
