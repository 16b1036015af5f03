"""Authentication providers."""

from __future__ import annotations

from storefront.auth.providers.base import AuthProviderBase
from storefront.auth.providers.disabled import DisabledAuthProvider
from storefront.auth.providers.mock import MockAuthProvider

PROVIDERS: dict[str, type[AuthProviderBase]] = {
    "disabled": DisabledAuthProvider,
    "mock": MockAuthProvider,
}


def get_provider(name: str) -> AuthProviderBase:
    """Build the provider registered under name.

    Args:
        name: Provider key, as in Settings.AUTH_PROVIDER.

    Returns:
        A new provider instance.

    Raises:
        ValueError: If no provider is registered under name.
    """
    try:
        provider_cls = PROVIDERS[name]
    except KeyError:
        raise ValueError(f"Unknown auth provider: {name}") from None
    return provider_cls()


__all__ = [
    "AuthProviderBase",
    "DisabledAuthProvider",
    "MockAuthProvider",
    "PROVIDERS",
    "get_provider",
]
