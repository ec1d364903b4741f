"""FastAPI application factory."""

from fastapi import FastAPI

from .api import api_router
from .web import web_router, redirect_router
from .errors import register_exception_handlers
from .middleware.logging import LoggingMiddleware


def _normalize_prefix(path_prefix: str) -> str:
    """Leading slash, no trailing slash; empty stays empty."""
    prefix = (path_prefix or "").strip().strip("/")
    return "/" + prefix if prefix else ""


def create_app(
    service_instance,
    config,
    lifespan=None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: URLShortenerService, or None when the lifespan wires it
        config: Configuration instance
        lifespan: Optional lifespan context manager

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="Shorten long URLs into 8 character keys and redirect them back",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config

    app.add_middleware(LoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(api_router, tags=["API"])
    app.include_router(web_router, tags=["Web"])
    # Matches any path under its prefix, so it goes last
    app.include_router(redirect_router, prefix=_normalize_prefix(config.path_prefix), tags=["Redirect"])

    return app
