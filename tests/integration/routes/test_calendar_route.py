"""
Integration tests for the public calendar feed endpoint.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from sync_ical.dependencies import get_db_engine
from sync_ical.main import app
from sync_ical.services.feed_token import issue_feed_token


@pytest.fixture
def client(db_engine: Engine) -> Generator[TestClient, None, None]:
    """FastAPI test client bound to the in-memory database."""
    app.dependency_overrides[get_db_engine] = lambda: db_engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.mark.integration
def test_calendar_feed_served_with_valid_token(
    client: TestClient, insert_unit: Callable[..., int], insert_reservation: Callable[..., int]
) -> None:
    unit_id = insert_unit(name="Studio A")
    insert_reservation(
        housing_unit_id=unit_id,
        check_in_date=date(2026, 3, 1),
        check_out_date=date(2026, 3, 5),
        guest_name="J. Doe",
    )

    response = client.get(f"/calendar/tenant-a?token={issue_feed_token('tenant-a')}")

    assert response.status_code == 200
    assert response.headers["content-type"] == "text/calendar; charset=utf-8"
    assert response.headers["content-disposition"] == 'attachment; filename="tenant-a.ics"'
    assert response.headers["cache-control"] == "no-cache, no-store, must-revalidate"
    assert response.text.startswith("BEGIN:VCALENDAR\r\n")
    assert "SUMMARY:J. Doe - Studio A\r\n" in response.text


@pytest.mark.integration
def test_calendar_feed_for_non_ascii_tenant_id(client: TestClient) -> None:
    tenant_id = "société-été"

    response = client.get(f"/calendar/{tenant_id}", params={"token": issue_feed_token(tenant_id)})

    assert response.status_code == 200
    assert response.headers["content-disposition"] == (
        'attachment; filename="soci%C3%A9t%C3%A9-%C3%A9t%C3%A9.ics"'
    )
    assert response.text.endswith("END:VCALENDAR\r\n")


@pytest.mark.integration
def test_calendar_feed_rejects_other_tenant_token(client: TestClient) -> None:
    response = client.get(f"/calendar/tenant-a?token={issue_feed_token('tenant-b')}")

    assert response.status_code == 401
    assert response.text == "Unauthorized"
    assert response.headers["content-type"].startswith("text/plain")


@pytest.mark.integration
def test_calendar_feed_requires_token(client: TestClient) -> None:
    response = client.get("/calendar/tenant-a")

    assert response.status_code == 401
    assert response.text == "Unauthorized"
