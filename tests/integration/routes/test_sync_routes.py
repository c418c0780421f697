"""
Integration tests for the scheduler-facing sync endpoints.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Generator
from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from sync_ical.dependencies import get_db_engine
from sync_ical.errors import FeedFetchError, FeedParseError
from sync_ical.main import app
from sync_ical.normalizers.events import SourceEvent

AUTH = {"Authorization": "Bearer test-cron-secret"}
NOW = datetime(2026, 2, 15, tzinfo=timezone.utc)
UPCOMING = SourceEvent(
    uid="x1",
    title="J. Doe",
    start=datetime(2026, 3, 1, tzinfo=timezone.utc),
    end=datetime(2026, 3, 5, tzinfo=timezone.utc),
)


@pytest.fixture
def client(db_engine: Engine) -> Generator[TestClient, None, None]:
    """FastAPI test client bound to the in-memory database."""
    app.dependency_overrides[get_db_engine] = lambda: db_engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.mark.integration
@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer wrong"}, {"Authorization": "test-cron-secret"}],
)
def test_sync_tenant_requires_secret(client: TestClient, headers: dict[str, str]) -> None:
    response = client.post("/sync/tenant-a", headers=headers)

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


@pytest.mark.integration
@patch("sync_ical.services.importer.utc_now", return_value=NOW)
@patch("sync_ical.services.importer.poll_feed", return_value=[UPCOMING])
def test_sync_tenant_returns_report(
    _poll: Mock, _now: Mock, client: TestClient, insert_unit: Callable[..., int]
) -> None:
    insert_unit(name="Studio A", ical_url="https://feeds.example.com/a.ics")

    response = client.post("/sync/tenant-a", headers=AUTH)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["tenant_id"] == "tenant-a"
    assert data["units_synced"] == 1
    assert data["created"] == 1
    assert data["errors"] == []


@pytest.mark.integration
def test_sync_tenant_without_units(client: TestClient) -> None:
    response = client.post("/sync/tenant-a", headers=AUTH)

    assert response.status_code == 200
    assert response.json()["message"] == "No housing unit with an iCal URL configured"


@pytest.mark.integration
@patch("sync_ical.services.importer.utc_now", return_value=NOW)
@patch("sync_ical.services.importer.poll_feed", return_value=[UPCOMING])
def test_sync_unit_returns_counts(
    _poll: Mock, _now: Mock, client: TestClient, insert_unit: Callable[..., int]
) -> None:
    unit_id = insert_unit(ical_url="https://feeds.example.com/a.ics")

    response = client.post(f"/sync/tenant-a/units/{unit_id}", headers=AUTH)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert (data["created"], data["updated"], data["skipped"]) == (1, 0, 0)


@pytest.mark.integration
def test_sync_unit_requires_secret(client: TestClient, insert_unit: Callable[..., int]) -> None:
    unit_id = insert_unit(ical_url="https://feeds.example.com/a.ics")

    response = client.post(f"/sync/tenant-a/units/{unit_id}")

    assert response.status_code == 401


@pytest.mark.integration
def test_sync_unit_unknown_or_foreign_unit_is_404(
    client: TestClient, insert_unit: Callable[..., int]
) -> None:
    foreign = insert_unit(tenant_id="tenant-b", ical_url="https://feeds.example.com/b.ics")

    assert client.post("/sync/tenant-a/units/4242", headers=AUTH).status_code == 404
    assert client.post(f"/sync/tenant-a/units/{foreign}", headers=AUTH).status_code == 404


@pytest.mark.integration
def test_sync_unit_without_feed_is_422(client: TestClient, insert_unit: Callable[..., int]) -> None:
    unit_id = insert_unit(ical_url=None)

    response = client.post(f"/sync/tenant-a/units/{unit_id}", headers=AUTH)

    assert response.status_code == 422


@pytest.mark.integration
@pytest.mark.parametrize(
    "error",
    [
        FeedFetchError("Could not fetch iCal feed: HTTP 404", status_code=404),
        FeedParseError("Invalid iCal document: missing VCALENDAR"),
    ],
)
def test_sync_unit_feed_errors_are_502(
    client: TestClient, insert_unit: Callable[..., int], error: Exception
) -> None:
    unit_id = insert_unit(ical_url="https://feeds.example.com/a.ics")

    with patch("sync_ical.services.importer.poll_feed", side_effect=error):
        response = client.post(f"/sync/tenant-a/units/{unit_id}", headers=AUTH)

    assert response.status_code == 502
    assert response.json()["detail"] == str(error)
