"""Storage contract for the URL shortener application.

This module defines the repository exception hierarchy and the ``URLStore``
protocol that the shortening service depends on.
"""

from typing import Protocol, runtime_checkable

from urlshortener.models.url import URLMapping


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class DuplicateCodeError(RepositoryError):
    """Exception raised when the unique constraint on ``code`` is violated."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"URLMapping with code={code} already exists")


class CodeNotFoundError(RepositoryError):
    """Exception raised when no mapping exists for a code."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"URLMapping with code={code} not found")


@runtime_checkable
class URLStore(Protocol):
    """Durable code to URL mapping with a uniqueness guarantee on ``code``."""

    async def insert(self, code: str, original_url: str) -> URLMapping:
        """Persist a new mapping and commit it before returning.

        Raises:
            DuplicateCodeError: If the code is already taken
            RepositoryError: On other database errors
        """
        ...

    async def lookup(self, code: str) -> str:
        """Return the original URL stored for ``code``.

        Raises:
            CodeNotFoundError: If no mapping exists
            RepositoryError: On database errors
        """
        ...

    async def close(self) -> None:
        """Release connections held by the store."""
        ...
