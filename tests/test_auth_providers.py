"""Tests for authentication providers."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from storefront.auth.providers import (
    AuthProviderBase,
    DisabledAuthProvider,
    MockAuthProvider,
    get_provider,
)
from storefront.exceptions import CapabilityDisabledError


class TestAuthProviderBase:
    """Test base provider interface."""

    def test_is_abstract(self):
        """AuthProviderBase cannot be instantiated directly."""
        with pytest.raises(TypeError):
            AuthProviderBase()


class TestDisabledAuthProvider:
    """Test the provider used while authentication is off."""

    def test_sign_out_raises(self):
        """Every sign-out is rejected as disabled."""
        with pytest.raises(CapabilityDisabledError) as exc_info:
            DisabledAuthProvider().sign_out("token")
        assert exc_info.value.status_code == 501
        assert exc_info.value.message == "Authentication has been disabled"


class TestMockAuthProvider:
    """Test the in-memory provider."""

    def test_issued_token_is_active(self):
        """issue_token starts a session."""
        provider = MockAuthProvider()
        token = provider.issue_token()
        assert provider.is_active(token)

    def test_sign_out_revokes_once(self):
        """A token can only be signed out once."""
        provider = MockAuthProvider()
        token = provider.issue_token()
        assert provider.sign_out(token) is True
        assert provider.sign_out(token) is False

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, token):
        """Missing tokens sign out nothing."""
        assert MockAuthProvider().sign_out(token) is False

    def test_concurrent_sign_out_succeeds_once(self):
        """Racing sign-outs of one token report success exactly once."""
        provider = MockAuthProvider()
        token = provider.issue_token()

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(provider.sign_out, [token] * 32))

        assert results.count(True) == 1


class TestGetProvider:
    """Test provider factory."""

    def test_builds_registered_providers(self):
        """Known names build their provider."""
        assert isinstance(get_provider("disabled"), DisabledAuthProvider)
        assert isinstance(get_provider("mock"), MockAuthProvider)

    def test_unknown_name_raises(self):
        """Unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown auth provider"):
            get_provider("oauth")
