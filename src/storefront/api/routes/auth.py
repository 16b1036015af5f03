"""Authentication routes.

POST /api/auth/signout - End the caller's session
GET|POST /api/auth/{path} - Session provider endpoints (disabled)

The signout route is mounted before the catch-all so it wins the match.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from storefront.api.contract import (
    Disabled,
    Failure,
    HandlerResult,
    HttpMethod,
    Ok,
    Route,
    RouteContext,
    RouteRequest,
    mount,
)
from storefront.auth.providers.disabled import AUTH_DISABLED_MESSAGE
from storefront.exceptions import CapabilityDisabledError

logger = logging.getLogger(__name__)

SIGN_OUT_UNAVAILABLE = "Sign out functionality is not available"

router = APIRouter()


def _token_from_body(body: object) -> str | None:
    if isinstance(body, dict):
        token = body.get("token")
        if isinstance(token, str) and token:
            return token
    return None


def sign_out(request: RouteRequest, context: RouteContext) -> HandlerResult:
    """End the session named by the body's token.

    Returns:
        Ok with signed_out flag, Disabled when auth is off, Failure when
        the provider errors.
    """
    if context.auth is None:
        return Disabled(AUTH_DISABLED_MESSAGE, SIGN_OUT_UNAVAILABLE)

    try:
        signed_out = context.auth.sign_out(_token_from_body(request.body))
    except CapabilityDisabledError:
        return Disabled(AUTH_DISABLED_MESSAGE, SIGN_OUT_UNAVAILABLE)
    except Exception as e:
        logger.error(f"Sign out failed: {e}", exc_info=True)
        return Failure({"error": "Sign out failed"})

    return Ok({"ok": True, "signed_out": signed_out})


def auth_disabled(request: RouteRequest, context: RouteContext) -> HandlerResult:
    """Session provider endpoints; authentication is switched off."""
    return Disabled(AUTH_DISABLED_MESSAGE)


SIGNOUT_ROUTE = Route(
    path="/auth/signout",
    handlers={HttpMethod.POST: sign_out},
    name="auth_signout",
)

SESSION_PROVIDER_ROUTE = Route(
    path="/auth/{path:path}",
    handlers={
        HttpMethod.GET: auth_disabled,
        HttpMethod.POST: auth_disabled,
    },
    name="auth_provider",
)

mount(router, SIGNOUT_ROUTE)
mount(router, SESSION_PROVIDER_ROUTE)
