"""Service layer for the URL shortener application.

This package contains the business logic of the application: URL validation,
short code generation, and the shortening service that ties them to storage.
"""

from urlshortener.services.shortener import ShortenerService, ShortenResult

__all__ = ["ShortenerService", "ShortenResult"]
