"""
Unit tests for metrics endpoint.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from sync_ical.main import app
from sync_ical.metrics import (
    feed_exports,
    feed_latency,
    feed_requests,
    poll_duration,
    poll_total,
    reservations_synced,
    unit_syncs,
)


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client."""
    return TestClient(app)


@pytest.mark.unit
def test_metrics_endpoint_returns_prometheus_format(client: TestClient) -> None:
    """Test that /metrics endpoint returns Prometheus text format."""
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]


@pytest.mark.unit
def test_metrics_endpoint_contains_custom_metrics(client: TestClient) -> None:
    """Test that /metrics endpoint includes the calendar sync metrics."""
    feed_requests.labels(status_code="200").inc()
    feed_latency.observe(0.42)
    poll_total.labels(status="success").inc()
    poll_duration.observe(1.1)
    reservations_synced.labels(outcome="created").inc(3)
    unit_syncs.labels(status="success").inc()
    feed_exports.labels(status="served").inc()

    content = client.get("/metrics").text

    assert 'calsync_feed_requests_total{status_code="200"}' in content
    assert "calsync_feed_latency_seconds_bucket" in content
    assert 'calsync_polls_total{status="success"}' in content
    assert "calsync_poll_duration_seconds_count" in content
    assert 'calsync_reservations_synced_total{outcome="created"}' in content
    assert 'calsync_unit_syncs_total{status="success"}' in content
    assert 'calsync_feed_exports_total{status="served"}' in content


@pytest.mark.unit
def test_metrics_endpoint_includes_help_and_type_metadata(client: TestClient) -> None:
    """Test that metrics include Prometheus HELP and TYPE metadata."""
    content = client.get("/metrics").text

    assert "# HELP calsync_polls_total" in content
    assert "# TYPE calsync_polls_total counter" in content
    assert "# TYPE calsync_poll_duration_seconds histogram" in content
