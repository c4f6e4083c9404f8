"""URL Repository for the URL shortener application.

This module provides the SQLURLRepository class, the SQLAlchemy-backed
implementation of the ``URLStore`` contract.
"""

import logging
import time
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from urlshortener.core.metrics import ShortenerMetrics
from urlshortener.models.url import URLMapping
from urlshortener.repositories.base import (
    CodeNotFoundError,
    DuplicateCodeError,
    RepositoryError,
)

logger = logging.getLogger(__name__)


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell a unique-constraint violation apart from other integrity errors.

    SQLite reports ``UNIQUE constraint failed``; PostgreSQL reports
    ``duplicate key value violates unique constraint``.
    """
    message = str(error.orig if error.orig is not None else error).lower()
    return "unique constraint" in message or "duplicate key" in message


class SQLURLRepository:
    """
    Repository for URLMapping rows.

    Every call checks out its own session, so independent requests never
    share a connection and concurrent inserts are serialized only by the
    database's unique index on ``code``.
    """

    def __init__(self, engine: AsyncEngine, metrics: Optional[ShortenerMetrics] = None):
        """
        Initialize the repository.

        Args:
            engine: Async engine owning the connection pool
            metrics: Observability port receiving storage outcomes and latency
        """
        self.engine = engine
        self.metrics = metrics
        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    def _record(self, operation: str, status: str, start: float) -> None:
        if self.metrics is not None:
            self.metrics.record_db_operation(operation, status, time.perf_counter() - start)

    async def insert(self, code: str, original_url: str) -> URLMapping:
        """
        Insert a new mapping and commit it.

        Args:
            code: The short code to claim
            original_url: The URL exactly as submitted

        Returns:
            The committed URLMapping

        Raises:
            DuplicateCodeError: If the code already exists
            RepositoryError: On other database errors
        """
        start = time.perf_counter()
        async with self.session_factory() as session:
            mapping = URLMapping(code=code, original_url=original_url)
            session.add(mapping)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                if is_unique_violation(e):
                    self._record("insert", "collision", start)
                    raise DuplicateCodeError(code) from e
                self._record("insert", "error", start)
                logger.error(f"Integrity error storing code {code}: {e}")
                raise RepositoryError(f"Database error storing URL: {e}") from e
            except SQLAlchemyError as e:
                await session.rollback()
                self._record("insert", "error", start)
                logger.error(f"Error storing code {code}: {e}")
                raise RepositoryError(f"Database error storing URL: {e}") from e

        self._record("insert", "success", start)
        return mapping

    async def lookup(self, code: str) -> str:
        """
        Find the original URL for a short code.

        Args:
            code: The short code to look up

        Returns:
            The stored original URL

        Raises:
            CodeNotFoundError: If no mapping exists for the code
            RepositoryError: On database errors
        """
        start = time.perf_counter()
        try:
            async with self.session_factory() as session:
                query = select(URLMapping.original_url).where(URLMapping.code == code)
                result = await session.execute(query)
                original_url = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self._record("lookup", "error", start)
            logger.error(f"Error retrieving URL for code {code}: {e}")
            raise RepositoryError(f"Error retrieving URL by code: {e}") from e

        if original_url is None:
            self._record("lookup", "not_found", start)
            raise CodeNotFoundError(code)

        self._record("lookup", "success", start)
        return original_url

    async def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        await self.engine.dispose()
        logger.info("URL repository closed")
