"""Test fixtures for the URL shortener application."""

import os

# Must be set before urlshortener builds its module-level settings and app
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from typing import Iterator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from urlshortener.core.config import Settings
from urlshortener.core.metrics import ShortenerMetrics
from urlshortener.db.base import get_engine, init_db
from urlshortener.main import create_app
from urlshortener.repositories.url_repository import SQLURLRepository
from urlshortener.services.shortener import ShortenerService
from tests.utils import TEST_BASE_URL


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        ENVIRONMENT="testing",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'urlshortener.db'}",
        BASE_URL=TEST_BASE_URL,
        LOG_TO_FILE=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def metric_reader() -> InMemoryMetricReader:
    return InMemoryMetricReader()


@pytest.fixture
def meter_provider(metric_reader) -> MeterProvider:
    return MeterProvider(metric_readers=[metric_reader])


@pytest.fixture
def metrics(meter_provider) -> ShortenerMetrics:
    return ShortenerMetrics.from_provider(meter_provider)


@pytest_asyncio.fixture
async def test_engine(test_settings):
    """Create a test database engine with the schema in place."""
    engine = get_engine(test_settings)
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def url_repository(test_engine, metrics) -> SQLURLRepository:
    return SQLURLRepository(test_engine, metrics=metrics)


@pytest.fixture
def shortener_service(url_repository, metrics) -> ShortenerService:
    return ShortenerService(url_repository, metrics, base_url=TEST_BASE_URL)


@pytest.fixture
def app(test_settings, meter_provider):
    return create_app(test_settings, meter_provider=meter_provider)


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    """Test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
