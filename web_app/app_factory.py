"""FastAPI application factory."""

from fastapi import FastAPI

from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware
from .middleware.error_handling import register_error_handlers


def create_app(
    store_instance,
    cache_instance,
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store_instance: Link store instance
        cache_instance: Cache instance (or None)
        service_instance: ShortlinkService instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="shortlink",
        description="URL shortening service with per-redirect access log",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Store instances in app state for access in routes
    app.state.store = store_instance
    app.state.cache = cache_instance
    app.state.service = service_instance
    app.state.config = config

    app.add_middleware(LoggingMiddleware)
    register_error_handlers(app)

    # API first so /api/... never reaches the short code routes
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Links"])

    return app
