"""Messaging inbox routes.

POST /api/messages/bulk - Bulk thread operations
GET|POST|PATCH|DELETE /api/messages/labels - Thread labels
GET|POST|PATCH|DELETE /api/messages/quick-replies - Saved replies
GET /api/messages/realtime - Long-poll for new messages
GET /api/admin/message-integration - Integration status

None of the inbox features exist yet. The routes reserve their paths and
methods so clients get 501 (or 405) instead of 404.
"""

from __future__ import annotations

from fastapi import APIRouter

from storefront.api.contract import (
    HandlerResult,
    HttpMethod,
    NotImplementedYet,
    Ok,
    Route,
    RouteContext,
    RouteRequest,
    mount,
)

router = APIRouter()

CRUD_METHODS = (HttpMethod.GET, HttpMethod.POST, HttpMethod.PATCH, HttpMethod.DELETE)


def not_implemented(feature: str):
    """Build a handler reporting feature as not implemented."""

    def handler(request: RouteRequest, context: RouteContext) -> HandlerResult:
        return NotImplementedYet(feature)

    handler.__name__ = f"{feature.replace('-', '_')}_not_implemented"
    return handler


def message_integration_status(request: RouteRequest, context: RouteContext) -> HandlerResult:
    return Ok(
        {
            "ok": True,
            "message": "Message integration endpoint - pending implementation",
        }
    )


BULK_ROUTE = Route(
    path="/messages/bulk",
    handlers={HttpMethod.POST: not_implemented("message-bulk-operations")},
    name="messages_bulk",
)

LABELS_ROUTE = Route(
    path="/messages/labels",
    handlers={method: not_implemented("message-labels") for method in CRUD_METHODS},
    name="messages_labels",
)

QUICK_REPLIES_ROUTE = Route(
    path="/messages/quick-replies",
    handlers={method: not_implemented("message-quick-replies") for method in CRUD_METHODS},
    name="messages_quick_replies",
)

REALTIME_ROUTE = Route(
    path="/messages/realtime",
    handlers={HttpMethod.GET: not_implemented("message-realtime")},
    name="messages_realtime",
)

MESSAGE_INTEGRATION_ROUTE = Route(
    path="/admin/message-integration",
    handlers={HttpMethod.GET: message_integration_status},
    name="admin_message_integration",
)

ROUTES = [
    BULK_ROUTE,
    LABELS_ROUTE,
    QUICK_REPLIES_ROUTE,
    REALTIME_ROUTE,
    MESSAGE_INTEGRATION_ROUTE,
]

for _route in ROUTES:
    mount(router, _route)
