"""Test utilities for URL shortener tests."""

import random
import string
from typing import Dict, Iterable, Optional

from opentelemetry.sdk.metrics.export import InMemoryMetricReader
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from urlshortener.models.url import URLMapping
from urlshortener.repositories.base import RepositoryError

TEST_BASE_URL = "http://sho.rt"


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8).lower()}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


async def count_rows(engine) -> int:
    async with engine.connect() as conn:
        result = await conn.execute(select(func.count()).select_from(URLMapping))
        return result.scalar_one()


def metric_total(reader: InMemoryMetricReader, name: str, attributes: Optional[Dict] = None) -> float:
    """Sum a counter (or count a histogram) across data points, optionally filtered by attributes."""
    data = reader.get_metrics_data()
    if data is None:
        return 0

    total = 0
    for resource_metrics in data.resource_metrics:
        for scope_metrics in resource_metrics.scope_metrics:
            for metric in scope_metrics.metrics:
                if metric.name != name:
                    continue
                for point in metric.data.data_points:
                    if attributes and any(point.attributes.get(k) != v for k, v in attributes.items()):
                        continue
                    total += point.value if hasattr(point, "value") else point.count
    return total


class FailingStore:
    """Store whose engine is down."""

    def __init__(self):
        self.lookups = []

    async def insert(self, code: str, original_url: str):
        raise RepositoryError("database is locked")

    async def lookup(self, code: str) -> str:
        self.lookups.append(code)
        raise RepositoryError("database is locked")

    async def close(self) -> None:
        pass


def sequence_generator(codes: Iterable[str]):
    """Code generator handing out ``codes`` in order, ignoring length and alphabet."""
    iterator = iter(codes)
    calls = []

    def generate(length: int, alphabet: str) -> str:
        code = next(iterator)
        calls.append(code)
        return code

    generate.calls = calls
    return generate


async def fetch_mapping(engine, code: str) -> Optional[URLMapping]:
    """Load a stored row directly, bypassing the repository."""
    async with AsyncSession(engine) as session:
        result = await session.execute(select(URLMapping).where(URLMapping.code == code))
        return result.scalar_one_or_none()
