"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
"""

from typing import Optional


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class URLError(ServiceError):
    """Base exception for URL-related errors."""
    pass


class InvalidURLError(URLError):
    """The submitted URL failed validation."""

    def __init__(self, url: Optional[str], reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid URL: {reason}")


class URLCreationError(URLError):
    """Error occurred during URL creation."""
    pass


class ShortCodeGenerationError(URLCreationError):
    """Failed to issue a unique short code."""
    pass


class URLNotFoundError(URLError):
    """No URL is stored for the requested short code."""
    pass


class URLStorageError(URLError):
    """The storage engine failed while serving the request."""
    pass
