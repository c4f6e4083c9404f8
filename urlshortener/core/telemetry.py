"""OpenTelemetry metrics setup for the URL Shortener application."""

import logging
from functools import lru_cache
from typing import Optional

from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource

logger = logging.getLogger(__name__)


@lru_cache
def setup_telemetry(
    service_name: str,
    service_version: str,
    environment: str,
    prometheus_enabled: bool = True,
    otlp_endpoint: Optional[str] = None,
    export_interval_millis: int = 60000,
) -> MeterProvider:
    """Build the process-wide meter provider.

    Cached so that repeated application factories in one process share a
    single provider and a single Prometheus collector registration.
    """
    resource = Resource.create({
        "service.name": service_name,
        "service.version": service_version,
        "deployment.environment": environment,
    })

    readers = []
    if prometheus_enabled:
        readers.append(PrometheusMetricReader())
        logger.info("Prometheus metric reader registered")
    else:
        logger.info("Prometheus metric reader is disabled")

    if otlp_endpoint:
        readers.append(PeriodicExportingMetricReader(
            OTLPMetricExporter(endpoint=otlp_endpoint),
            export_interval_millis=export_interval_millis,
        ))
        logger.info(f"OTLP metric export to {otlp_endpoint}")

    return MeterProvider(resource=resource, metric_readers=readers)
