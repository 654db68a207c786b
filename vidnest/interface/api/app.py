"""FastAPI application."""

from typing import Optional

from dishka import AsyncContainer
from fastapi import FastAPI

from vidnest.interface.api.errors import register_error_handlers
from vidnest.interface.api.routes import comments, health, likes
from vidnest.util.di.container import create_container, setup_di
from vidnest.util.observability import instrument_fastapi

API_PREFIX = "/api/v1"


def create_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py does it and passes a test container.

    Args:
        container: DI container; the production container when omitted
    """
    app_instance = FastAPI(
        title="VidNest Engagement API",
        description="Likes and threaded comments for videos and tweets",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Setup dependency injection
    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    register_error_handlers(app_instance)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(likes.router, prefix=API_PREFIX)
    app_instance.include_router(comments.router, prefix=API_PREFIX)

    return app_instance
