"""Route handler dispatch contract.

A route is a path plus one handler per supported HTTP method. Handlers take
a RouteRequest and a RouteContext and return a tagged HandlerResult;
dispatch() turns that into exactly one RouteResponse. Nothing here imports
request objects from the web framework, so every route can be exercised as
a plain function call. mount() is the only FastAPI binding.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Union

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from storefront.api.dependencies import get_app_settings, get_auth_provider, get_session_factory
from storefront.auth.providers.base import AuthProviderBase
from storefront.config import Settings
from storefront.exceptions import StorefrontError

logger = logging.getLogger(__name__)

METHOD_NOT_ALLOWED = {"error": "Method not allowed"}
INTERNAL_ERROR = {"error": "Internal server error"}


class HttpMethod(str, Enum):
    """HTTP methods a route may register."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


# ============================================================================
# Request / Response
# ============================================================================


@dataclass(frozen=True)
class RouteRequest:
    """A single invocation of a route."""

    method: str
    params: Mapping[str, str] = field(default_factory=dict)
    body: Any = None


@dataclass(frozen=True)
class RouteResponse:
    """The terminal response for a request."""

    status_code: int
    body: dict[str, Any] | None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass
class RouteContext:
    """Collaborators available to handlers for one request.

    The database session is opened lazily through open_db(), so routes that
    never touch the DB never build an engine, and construction errors are
    raised inside the handler that asked for the session.

    Attributes:
        db: Database session, or None until opened.
        session_factory: Builds a session on first open_db() call.
        auth: Authentication provider.
        settings: Application settings.
    """

    db: Session | None = None
    session_factory: Callable[[], Session] | None = None
    auth: AuthProviderBase | None = None
    settings: Settings | None = None
    _owns_db: bool = field(default=False, repr=False)

    def open_db(self) -> Session | None:
        """Return the session, creating it from session_factory if needed."""
        if self.db is None and self.session_factory is not None:
            self.db = self.session_factory()
            self._owns_db = True
        return self.db

    def close(self) -> None:
        """Close a session opened by open_db(). Injected sessions are left alone."""
        if self._owns_db and self.db is not None:
            self.db.close()
            self.db = None
            self._owns_db = False


# ============================================================================
# Handler results
# ============================================================================


@dataclass(frozen=True)
class Ok:
    """Successful result."""

    payload: dict[str, Any] | None
    status_code: int = 200
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Disabled:
    """The capability behind this route has been switched off."""

    error: str
    message: str | None = None


@dataclass(frozen=True)
class NotImplementedYet:
    """The route exists but its feature has no behavior yet."""

    feature: str


@dataclass(frozen=True)
class Failure:
    """A collaborator failed; body is returned to the caller as-is."""

    body: dict[str, Any]
    status_code: int = 500


HandlerResult = Union[Ok, Disabled, NotImplementedYet, Failure]
Handler = Callable[[RouteRequest, RouteContext], HandlerResult]


def to_response(result: HandlerResult) -> RouteResponse:
    """Convert a handler result to its response.

    Args:
        result: Tagged handler result.

    Returns:
        RouteResponse for the result variant.
    """
    if isinstance(result, Ok):
        return RouteResponse(result.status_code, result.payload, dict(result.headers))
    if isinstance(result, Disabled):
        body = {"error": result.error}
        if result.message is not None:
            body["message"] = result.message
        return RouteResponse(501, body)
    if isinstance(result, NotImplementedYet):
        return RouteResponse(501, {"error": "Not implemented", "feature": result.feature})
    if isinstance(result, Failure):
        return RouteResponse(result.status_code, result.body)
    raise TypeError(f"Unknown handler result: {type(result).__name__}")


# ============================================================================
# Routes
# ============================================================================


@dataclass(frozen=True)
class Route:
    """A path and its per-method handlers."""

    path: str
    handlers: Mapping[HttpMethod, Handler]
    name: str | None = None

    @property
    def allowed_methods(self) -> list[str]:
        return [method.value for method in HttpMethod if method in self.handlers]

    def handler_for(self, method: str) -> Handler | None:
        try:
            return self.handlers.get(HttpMethod(method.upper()))
        except ValueError:
            return None


def dispatch(route: Route, request: RouteRequest, context: RouteContext) -> RouteResponse:
    """Run the handler for a request and produce its response.

    Args:
        route: Route being invoked.
        request: Method, path parameters and body.
        context: Collaborators for this request.

    Returns:
        Exactly one RouteResponse. Errors raised by the handler are
        converted, never propagated.
    """
    handler = route.handler_for(request.method)
    if handler is None:
        logger.debug(f"{request.method} not allowed on {route.path}")
        return RouteResponse(
            405,
            dict(METHOD_NOT_ALLOWED),
            {"Allow": ", ".join(route.allowed_methods)},
        )

    try:
        result = handler(request, context)
    except StorefrontError as e:
        logger.warning(f"{request.method} {route.path} failed: {e.message}")
        return RouteResponse(e.status_code, e.to_dict())
    except Exception:
        logger.exception(f"Unhandled error in {request.method} {route.path}")
        return RouteResponse(500, dict(INTERNAL_ERROR))

    return to_response(result)


# ============================================================================
# FastAPI binding
# ============================================================================


async def _read_json_body(request: Request) -> Any:
    """Read the JSON body, returning None when absent or malformed."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        # JSONDecodeError and UnicodeDecodeError are ValueErrors; deep nesting
        # exhausts the decoder's recursion limit.
        return None


def _to_framework_response(response: RouteResponse) -> Response:
    if response.body is None:
        return Response(status_code=response.status_code, headers=dict(response.headers))
    return JSONResponse(
        status_code=response.status_code,
        content=response.body,
        headers=dict(response.headers),
    )


def mount(router: APIRouter, route: Route) -> None:
    """Register a Route on a FastAPI router.

    The endpoint accepts every HttpMethod so that dispatch() decides 405s.
    It only receives a session factory; the session itself is opened by the
    handler that needs it and closed once dispatch() returns.

    Args:
        router: Router to register on.
        route: Route to bind.
    """

    async def endpoint(
        request: Request,
        session_factory: Callable[[], Session] = Depends(get_session_factory),
        auth: AuthProviderBase = Depends(get_auth_provider),
        settings: Settings = Depends(get_app_settings),
    ) -> Response:
        route_request = RouteRequest(
            method=request.method,
            params=dict(request.path_params),
            body=await _read_json_body(request),
        )
        context = RouteContext(session_factory=session_factory, auth=auth, settings=settings)
        try:
            response = await run_in_threadpool(dispatch, route, route_request, context)
        finally:
            await run_in_threadpool(context.close)
        return _to_framework_response(response)

    router.add_api_route(
        route.path,
        endpoint,
        methods=[method.value for method in HttpMethod],
        name=route.name,
        include_in_schema=True,
    )
