"""FastAPI application factory.

Usage:
    uvicorn storefront.api.app:app --reload
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront import __version__
from storefront.api.dependencies import get_app_settings, get_auth_provider, get_session_factory
from storefront.auth.providers import get_provider
from storefront.config import Settings, configure_logging, get_settings
from storefront.exceptions import StorefrontError, storefront_exception_handler
from storefront.media import create_environment

logger = logging.getLogger(__name__)

# Re-exported so callers can override dependencies on the app module
__all__ = [
    "app",
    "create_app",
    "get_app_settings",
    "get_auth_provider",
    "get_session_factory",
]


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Optional settings; read from the environment when omitted.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Storefront Admin API",
        description="Admin backend for the storefront catalog and inbox",
        version=__version__,
    )

    app.state.settings = settings
    app.state.auth_provider = get_provider(settings.AUTH_PROVIDER)
    app.state.templates = create_environment(settings.IMAGE_FALLBACK_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StorefrontError, storefront_exception_handler)

    # Include routes
    from storefront.api.routes import auth, diagnostics, messages

    app.include_router(auth.router, prefix="/api")
    app.include_router(diagnostics.router, prefix="/api")
    app.include_router(messages.router, prefix="/api")

    logger.info(
        f"Starting {settings.SERVICE_NAME} in {settings.ENVIRONMENT} mode "
        f"(auth provider: {settings.AUTH_PROVIDER})"
    )

    return app


# Default app instance
app = create_app()
