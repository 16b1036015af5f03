"""Structured errors for the admin API.

Every error carries the HTTP status it maps to, so route handlers and the
application-level exception handler turn it into the same JSON body.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class StorefrontError(Exception):
    """Base exception for the admin API."""

    def __init__(
        self,
        message: str,
        code: str = "STOREFRONT_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a JSON response body."""
        result: dict[str, Any] = {
            "error": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


class CapabilityDisabledError(StorefrontError):
    """Raised when a capability has been intentionally switched off."""

    def __init__(self, capability: str, message: str | None = None):
        super().__init__(
            message=message or f"{capability} has been disabled",
            code="CAPABILITY_DISABLED",
            status_code=501,
            details={"capability": capability},
        )
        self.capability = capability


class FeatureNotImplementedError(StorefrontError):
    """Raised for endpoints that exist but have no behavior yet."""

    def __init__(self, feature: str):
        super().__init__(
            message=f"Not implemented: {feature}",
            code="NOT_IMPLEMENTED",
            status_code=501,
            details={"feature": feature},
        )
        self.feature = feature


async def storefront_exception_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    """Convert StorefrontError raised outside the dispatch contract to JSON."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
