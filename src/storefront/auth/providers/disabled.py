"""Provider used while authentication is switched off."""

from __future__ import annotations

from storefront.auth.providers.base import AuthProviderBase
from storefront.exceptions import CapabilityDisabledError

AUTH_DISABLED_MESSAGE = "Authentication has been disabled"


class DisabledAuthProvider(AuthProviderBase):
    """Rejects every call with CapabilityDisabledError."""

    name = "disabled"

    def sign_out(self, token: str | None) -> bool:
        raise CapabilityDisabledError("Authentication", AUTH_DISABLED_MESSAGE)
