"""Basic tests to verify database setup."""

import pytest
from sqlalchemy import text
from sqlalchemy.pool import NullPool, StaticPool

from urlshortener.core.config import Settings
from urlshortener.db.base import DatabaseHealthCheck, get_engine, get_engine_config, init_db


@pytest.mark.asyncio
async def test_create_tables(test_engine):
    """Verify the urls table is created."""
    async with test_engine.connect() as conn:
        result = await conn.execute(
            text("SELECT name FROM sqlite_master WHERE type='table' AND name='urls'")
        )
        tables = [row[0] for row in result.fetchall()]

    assert "urls" in tables


@pytest.mark.asyncio
async def test_init_db_keeps_existing_rows(test_engine, url_repository):
    await url_repository.insert("keep01", "https://kept.example")

    await init_db(test_engine)

    assert await url_repository.lookup("keep01") == "https://kept.example"


@pytest.mark.asyncio
async def test_health_check_healthy(test_engine):
    result = await DatabaseHealthCheck(test_engine).check_connection()

    assert result["status"] == "healthy"
    assert result["error"] is None
    assert result["latency_ms"] >= 0


@pytest.mark.asyncio
async def test_health_check_unhealthy(tmp_path):
    settings = Settings(
        ENVIRONMENT="testing",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'db.sqlite'}",
    )
    engine = get_engine(settings)
    try:
        result = await DatabaseHealthCheck(engine).check_connection()
    finally:
        await engine.dispose()

    assert result["status"] == "unhealthy"
    assert result["error"]


def test_engine_config_per_database():
    memory = get_engine_config(Settings(DATABASE_URL="sqlite+aiosqlite:///:memory:"))
    testing = get_engine_config(Settings(ENVIRONMENT="testing", DATABASE_URL="sqlite+aiosqlite:///./t.db"))
    production = get_engine_config(
        Settings(ENVIRONMENT="production", DATABASE_URL="postgresql+asyncpg://u:p@db/urls", DB_POOL_SIZE=7)
    )

    assert memory["poolclass"] is StaticPool
    assert testing["poolclass"] is NullPool
    assert production["pool_size"] == 7
    assert production["pool_pre_ping"] is True
