"""Observability port for the URL shortener.

``ShortenerMetrics`` owns every instrument the application records. It is
created once per application and handed to the repository, the service and
the HTTP middleware, which never reach for a global meter themselves.
"""

from typing import Optional

from opentelemetry.metrics import Meter, MeterProvider

METER_NAME = "urlshortener"


class ShortenerMetrics:
    """Named business, storage and HTTP instruments."""

    def __init__(self, meter: Meter):
        self.meter = meter

        # Business metrics
        self.urls_shortened = meter.create_counter(
            name="url_shortener.urls.shortened",
            description="Total number of URLs shortened",
            unit="1",
        )
        self.urls_redirected = meter.create_counter(
            name="url_shortener.urls.redirected",
            description="Total number of successful URL redirects",
            unit="1",
        )
        self.urls_not_found = meter.create_counter(
            name="url_shortener.urls.not_found",
            description="Total number of lookups for unknown codes",
            unit="1",
        )
        self.internal_errors = meter.create_counter(
            name="url_shortener.internal_errors",
            description="Total number of internal errors",
            unit="1",
        )
        self.code_collisions = meter.create_counter(
            name="url_shortener.code.collisions",
            description="Generated codes rejected because they were already taken",
            unit="1",
        )

        # Database metrics
        self.db_operations = meter.create_counter(
            name="url_shortener.db.operations",
            description="Total number of database operations",
            unit="1",
        )
        self.db_operation_duration = meter.create_histogram(
            name="url_shortener.db.operation.duration",
            description="Duration of database operations",
            unit="s",
        )

        # HTTP metrics
        self.http_requests = meter.create_counter(
            name="url_shortener.http.requests",
            description="Total number of HTTP requests",
            unit="1",
        )
        self.http_duration = meter.create_histogram(
            name="url_shortener.http.duration",
            description="Duration of HTTP requests",
            unit="ms",
        )

    @classmethod
    def from_provider(cls, meter_provider: MeterProvider, version: Optional[str] = None) -> "ShortenerMetrics":
        return cls(meter_provider.get_meter(METER_NAME, version))

    def record_url_shortened(self) -> None:
        self.urls_shortened.add(1)

    def record_url_redirected(self) -> None:
        self.urls_redirected.add(1)

    def record_url_not_found(self) -> None:
        self.urls_not_found.add(1)

    def record_internal_error(self, operation: str) -> None:
        self.internal_errors.add(1, {"operation": operation})

    def record_code_collision(self) -> None:
        self.code_collisions.add(1)

    def record_db_operation(self, operation: str, status: str, duration: float) -> None:
        self.db_operations.add(1, {"operation": operation, "status": status})
        self.db_operation_duration.record(duration, {"operation": operation})

    def record_http_request(self, method: str, route: str, status_code: int, duration_ms: float) -> None:
        attributes = {
            "http.method": method,
            "http.route": route,
            "http.status_code": status_code,
        }
        self.http_requests.add(1, attributes)
        self.http_duration.record(duration_ms, {"http.method": method, "http.route": route})
