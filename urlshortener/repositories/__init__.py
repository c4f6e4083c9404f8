"""Repository layer for the URL shortener application.

This module provides the storage contract and its SQL implementation,
following the Repository pattern for clean separation of concerns.
"""

from urlshortener.repositories.base import (
    CodeNotFoundError,
    DuplicateCodeError,
    RepositoryError,
    URLStore,
)
from urlshortener.repositories.url_repository import SQLURLRepository

__all__ = [
    # Contract and exceptions
    "URLStore",
    "RepositoryError",
    "DuplicateCodeError",
    "CodeNotFoundError",

    # Concrete repositories
    "SQLURLRepository",
]
