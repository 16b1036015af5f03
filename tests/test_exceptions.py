"""Tests for structured errors and the app-level handler."""

from fastapi.testclient import TestClient

from storefront.config import Settings
from storefront.exceptions import (
    CapabilityDisabledError,
    FeatureNotImplementedError,
    StorefrontError,
)


class TestErrorBodies:
    """to_dict shapes."""

    def test_base_error_defaults(self):
        """Base error is a 500 without details."""
        error = StorefrontError("boom")
        assert error.status_code == 500
        assert error.to_dict() == {"error": "boom", "code": "STOREFRONT_ERROR"}

    def test_capability_disabled(self):
        """Disabled capabilities are 501 and name the capability."""
        error = CapabilityDisabledError("Authentication")
        assert error.status_code == 501
        assert error.message == "Authentication has been disabled"
        assert error.to_dict()["details"] == {"capability": "Authentication"}

    def test_feature_not_implemented(self):
        """Unimplemented features are 501."""
        error = FeatureNotImplementedError("message-labels")
        assert error.status_code == 501
        assert error.code == "NOT_IMPLEMENTED"


class TestExceptionHandler:
    """Errors raised outside the dispatch contract still produce JSON."""

    def test_plain_fastapi_route_error_is_converted(self):
        """A StorefrontError from a regular endpoint uses its status and body."""
        from storefront.api.app import create_app

        app = create_app(Settings(_env_file=None, DATABASE_URL="sqlite:///:memory:"))

        @app.get("/api/exports")
        def exports():
            raise FeatureNotImplementedError("exports")

        response = TestClient(app).get("/api/exports")

        assert response.status_code == 501
        assert response.json() == {
            "error": "Not implemented: exports",
            "code": "NOT_IMPLEMENTED",
            "details": {"feature": "exports"},
        }
