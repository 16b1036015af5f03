"""Tests for authentication routes."""

import pytest
from fastapi.testclient import TestClient

from storefront.api.contract import RouteContext, RouteRequest, dispatch
from storefront.api.routes.auth import SIGNOUT_ROUTE, sign_out
from storefront.auth.providers import AuthProviderBase, MockAuthProvider
from storefront.config import Settings


def create_test_client(auth_provider: str = "disabled"):
    """Create app with auth provider. Returns (client, app)."""
    from storefront.api.app import create_app

    settings = Settings(
        _env_file=None,
        DATABASE_URL="sqlite:///:memory:",
        AUTH_PROVIDER=auth_provider,
    )
    app = create_app(settings)
    return TestClient(app), app


class FailingAuthProvider(AuthProviderBase):
    """Provider whose backend is down."""

    def sign_out(self, token):
        raise ConnectionError("session store unreachable")


class TestSessionProviderStub:
    """Test /api/auth/{path} with authentication disabled."""

    @pytest.mark.parametrize("path", ["session", "providers", "callback/credentials", "csrf"])
    def test_get_returns_501(self, path):
        """GET on any provider path returns 501."""
        client, _ = create_test_client()
        response = client.get(f"/api/auth/{path}")
        assert response.status_code == 501
        assert response.json() == {"error": "Authentication has been disabled"}

    def test_post_returns_501(self):
        """POST returns 501 with the disabled message."""
        client, _ = create_test_client()
        response = client.post("/api/auth/callback/credentials", json={"email": "a@b.c"})
        assert response.status_code == 501
        assert response.json()["error"] == "Authentication has been disabled"

    @pytest.mark.parametrize("method", ["put", "patch", "delete"])
    def test_other_methods_return_405(self, method):
        """Methods other than GET/POST are not allowed."""
        client, _ = create_test_client()
        response = client.request(method.upper(), "/api/auth/session")
        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}
        assert response.headers["allow"] == "GET, POST"


class TestSignOutDisabled:
    """Test POST /api/auth/signout with the default provider."""

    def test_returns_501(self):
        """Sign-out is unavailable while authentication is disabled."""
        client, _ = create_test_client()
        response = client.post("/api/auth/signout")
        assert response.status_code == 501
        assert response.json() == {
            "error": "Authentication has been disabled",
            "message": "Sign out functionality is not available",
        }

    def test_get_returns_405(self):
        """Sign-out only accepts POST; the catch-all does not take over."""
        client, _ = create_test_client()
        response = client.get("/api/auth/signout")
        assert response.status_code == 405
        assert response.headers["allow"] == "POST"


class TestSignOutWithProvider:
    """Test POST /api/auth/signout with a working provider."""

    def test_signs_out_known_token(self):
        """A token issued by the provider is revoked."""
        client, app = create_test_client(auth_provider="mock")
        provider: MockAuthProvider = app.state.auth_provider
        token = provider.issue_token()

        response = client.post("/api/auth/signout", json={"token": token})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "signed_out": True}
        assert not provider.is_active(token)

    def test_unknown_token_is_not_an_error(self):
        """Unknown tokens succeed with signed_out false."""
        client, _ = create_test_client(auth_provider="mock")
        response = client.post("/api/auth/signout", json={"token": "stale"})
        assert response.status_code == 200
        assert response.json()["signed_out"] is False

    def test_malformed_body_is_treated_as_no_token(self):
        """Invalid JSON does not fail the request."""
        client, _ = create_test_client(auth_provider="mock")
        response = client.post(
            "/api/auth/signout",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 200
        assert response.json()["signed_out"] is False

    def test_deeply_nested_body_is_treated_as_no_token(self):
        """JSON nested past the decoder recursion limit does not fail the request."""
        client, _ = create_test_client(auth_provider="mock")
        response = client.post(
            "/api/auth/signout",
            content=b"[" * 100_000 + b"]" * 100_000,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 200
        assert response.json() == {"ok": True, "signed_out": False}


class TestSignOutHandler:
    """Test the sign-out handler without the web framework."""

    def test_provider_failure_returns_500(self, caplog):
        """Provider errors are logged and become a generic 500."""
        response = dispatch(
            SIGNOUT_ROUTE,
            RouteRequest(method="POST", body={"token": "abc"}),
            RouteContext(auth=FailingAuthProvider()),
        )
        assert response.status_code == 500
        assert response.body == {"error": "Sign out failed"}
        assert "session store unreachable" in caplog.text

    def test_missing_provider_is_disabled(self):
        """No provider in context behaves like a disabled provider."""
        result = sign_out(RouteRequest(method="POST"), RouteContext())
        assert result.error == "Authentication has been disabled"

    def test_provider_called_exactly_once(self):
        """The provider is called once per request."""
        calls = []

        class RecordingProvider(AuthProviderBase):
            def sign_out(self, token):
                calls.append(token)
                return True

        dispatch(
            SIGNOUT_ROUTE,
            RouteRequest(method="POST", body={"token": "t-1"}),
            RouteContext(auth=RecordingProvider()),
        )
        assert calls == ["t-1"]
