"""Shared FastAPI dependencies.

Injected into mounted routes with Depends(); tests replace them through
app.dependency_overrides.
"""

from __future__ import annotations

from typing import Callable

from fastapi import Request
from sqlalchemy.orm import Session

from storefront.auth.providers import AuthProviderBase
from storefront.config import Settings
from storefront.db.session import get_session


def get_app_settings(request: Request) -> Settings:
    """Dependency returning the settings the app was created with."""
    return request.app.state.settings


def get_session_factory(request: Request) -> Callable[[], Session]:
    """Dependency returning a callable that opens a database session.

    Nothing is connected here. The engine is built the first time a handler
    calls the factory, so a bad DATABASE_URL surfaces inside that handler.
    """
    database_url = request.app.state.settings.DATABASE_URL

    def open_session() -> Session:
        return get_session(database_url)

    return open_session


def get_auth_provider(request: Request) -> AuthProviderBase:
    """Dependency returning the app's authentication provider."""
    return request.app.state.auth_provider
