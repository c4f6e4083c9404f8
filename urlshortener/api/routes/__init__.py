"""Routes package initialization.

This module assembles the route collection for the application.
"""

from fastapi import APIRouter

from urlshortener.api.routes import health, metrics, redirect, shortener


def create_api_router(api_prefix: str = "", metrics_enabled: bool = True) -> APIRouter:
    """Build the root router.

    The redirect route matches any single path segment, so it is included
    last and every fixed path has to be registered before it.
    """
    api_router = APIRouter()

    # Include shortener routes with API prefix
    api_router.include_router(shortener.router, prefix=api_prefix)

    # Include health check routes with API prefix
    api_router.include_router(health.router, prefix=api_prefix)

    if metrics_enabled:
        api_router.include_router(metrics.router)

    # Short URLs are served directly at /{code}
    api_router.include_router(redirect.router)

    return api_router


__all__ = ["create_api_router"]
