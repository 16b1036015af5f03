"""Diagnostics routes.

GET /api/test-db - Run a raw query against the database
GET|OPTIONS /api/health - Service and database health
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter

from storefront.api.contract import (
    Failure,
    HandlerResult,
    HttpMethod,
    Ok,
    Route,
    RouteContext,
    RouteRequest,
    mount,
)
from storefront.config import get_settings
from storefront.db import probe

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

_STARTED_AT = time.monotonic()

router = APIRouter()


def query_database(request: RouteRequest, context: RouteContext) -> HandlerResult:
    """Query the database server clock.

    Returns:
        Ok with the query result, or Failure carrying the driver's error
        message.
    """
    try:
        session = context.open_db()
        if session is None:
            return Failure({"ok": False, "error": "No database session available"})
        clock = probe.fetch_server_clock(session)
    except Exception as e:
        logger.error(f"Database connection error: {e}", exc_info=True)
        return Failure({"ok": False, "error": str(e)})

    return Ok(
        {
            "ok": True,
            "message": "Database connected successfully",
            "data": clock.to_dict(),
        }
    )


def _database_status(context: RouteContext) -> str:
    try:
        session = context.open_db()
        if session is None:
            return "disconnected"
        probe.ping(session)
    except Exception as e:
        logger.warning(f"Health check database probe failed: {e}")
        return "disconnected"
    return "connected"


def health(request: RouteRequest, context: RouteContext) -> HandlerResult:
    """Report service health.

    Status is "healthy" (200) when the database answers, otherwise
    "degraded" (503).
    """
    settings = context.settings or get_settings()
    database = _database_status(context)
    status = "healthy" if database == "connected" else "degraded"

    payload = {
        "status": status,
        "service": settings.SERVICE_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime_seconds": round(time.monotonic() - _STARTED_AT, 3),
        "environment": settings.ENVIRONMENT,
        "version": settings.APP_VERSION,
        "database": database,
    }
    status_code = 200 if status == "healthy" else 503
    return Ok(payload, status_code=status_code, headers=NO_CACHE_HEADERS)


def health_options(request: RouteRequest, context: RouteContext) -> HandlerResult:
    return Ok(None, headers={"Access-Control-Max-Age": "86400"})


TEST_DB_ROUTE = Route(
    path="/test-db",
    handlers={HttpMethod.GET: query_database},
    name="test_db",
)

HEALTH_ROUTE = Route(
    path="/health",
    handlers={
        HttpMethod.GET: health,
        HttpMethod.OPTIONS: health_options,
    },
    name="health",
)

mount(router, TEST_DB_ROUTE)
mount(router, HEALTH_ROUTE)
