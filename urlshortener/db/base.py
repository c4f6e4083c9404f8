"""Database base configuration for SQLAlchemy with SQLModel.

This module provides base database configuration for async SQLAlchemy with SQLModel.
It includes:
- Engine configuration
- Schema bootstrap
- Health check functionality
"""

from typing import Any, Dict, Optional
import asyncio
import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from urlshortener.core.config import Settings, settings as default_settings
# Registers the tables on SQLModel.metadata
from urlshortener.models.url import URLMapping  # noqa: F401

logger = logging.getLogger(__name__)


def _is_memory_database(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def get_engine_config(settings: Settings) -> Dict[str, Any]:
    """Get the engine configuration for the configured database and environment.

    Returns:
        Dict: Engine keyword arguments for ``create_async_engine``.
    """
    config: Dict[str, Any] = {"echo": settings.DB_ECHO}

    if _is_memory_database(settings.DATABASE_URL):
        # Every pooled connection would otherwise see its own empty database
        config["poolclass"] = StaticPool
        return config

    if settings.ENVIRONMENT.value == "testing":
        config["poolclass"] = NullPool
        return config

    config.update({
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_POOL_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_pre_ping": True,
    })
    return config


def get_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine.

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    settings = settings or default_settings
    engine_url = settings.DATABASE_URL
    engine_config = get_engine_config(settings)

    logger.info(f"Creating database engine for {make_url(engine_url).render_as_string(hide_password=True)}")

    return create_async_engine(engine_url, **engine_config)


async def init_db(engine: AsyncEngine) -> None:
    """Create missing tables. Existing tables and rows are left untouched."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database schema is up to date")


class DatabaseHealthCheck:
    """Health check functionality for the database connection."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def check_connection(self) -> Dict:
        """Check database connectivity and return status.

        Returns:
            Dict: Health check result containing status and latency information
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        status = "healthy"
        error_message = None
        latency_ms = 0

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            latency_ms = round((loop.time() - start_time) * 1000, 2)
        except Exception as e:
            status = "unhealthy"
            error_message = str(e)
            logger.error(f"Database health check failed: {e}")

        return {
            "status": status,
            "latency_ms": latency_ms,
            "error": error_message,
        }
