"""Tests for health and metrics endpoints."""

import pytest
from fastapi.testclient import TestClient

from urlshortener.main import create_app


@pytest.mark.api
class TestHealthEndpoints:

    def test_health(self, client, test_settings):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == test_settings.APP_VERSION
        assert data["environment"] == "testing"
        assert data["components"]["database"]["status"] == "healthy"

    def test_liveness(self, client):
        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"alive": True}

    def test_readiness(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["ready"] is True


@pytest.mark.api
def test_metrics_endpoint(test_settings):
    # Default provider, exported through the Prometheus reader
    with TestClient(create_app(test_settings)) as client:
        assert client.post("/shorten", json={"url": "https://example.com"}).status_code == 201
        response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "url_shortener_urls_shortened" in response.text


@pytest.mark.api
def test_metrics_endpoint_disabled(test_settings, meter_provider):
    settings = test_settings.model_copy(update={"METRICS_ENABLED": False})

    with TestClient(create_app(settings, meter_provider=meter_provider)) as client:
        response = client.get("/metrics", follow_redirects=False)

    # Falls through to the redirect route, which knows no such code
    assert response.status_code == 404
