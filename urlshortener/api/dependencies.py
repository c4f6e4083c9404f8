"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access the collaborators created at application startup.
"""

from fastapi import Request

from urlshortener.core.config import Settings
from urlshortener.db.base import DatabaseHealthCheck
from urlshortener.services.shortener import ShortenerService


def get_settings(request: Request) -> Settings:
    """Get the settings the application was built with."""
    return request.app.state.settings


def get_shortener_service(request: Request) -> ShortenerService:
    """Get the URL shortening service."""
    return request.app.state.shortener_service


def get_health_check(request: Request) -> DatabaseHealthCheck:
    """Get the database health checker."""
    return DatabaseHealthCheck(request.app.state.engine)
