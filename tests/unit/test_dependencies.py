"""
Unit tests for the engine dependency shared by the sync, calendar and readiness routes.
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from sync_ical.db.engine import engine as configured_engine
from sync_ical.dependencies import get_db_engine
from sync_ical.main import app
from sync_ical.schemas.sync import SyncReport
from sync_ical.services.feed_token import issue_feed_token


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.mark.unit
def test_get_db_engine_yields_configured_engine() -> None:
    provided = next(get_db_engine())

    assert provided is configured_engine
    assert provided.dialect.name == "sqlite"


@pytest.mark.unit
@patch("sync_ical.routes.calendar.export_feed", return_value="BEGIN:VCALENDAR\r\nEND:VCALENDAR\r\n")
def test_calendar_route_receives_overridden_engine(mock_export: Mock, client: TestClient) -> None:
    override = Mock(spec=Engine)
    app.dependency_overrides[get_db_engine] = lambda: override
    token = issue_feed_token("tenant-a")

    response = client.get("/calendar/tenant-a", params={"token": token})

    assert response.status_code == 200
    mock_export.assert_called_once_with(override, "tenant-a", token)


@pytest.mark.unit
@patch("sync_ical.routes.sync.sync_all_units")
def test_sync_route_receives_overridden_engine(mock_sync: Mock, client: TestClient) -> None:
    override = Mock(spec=Engine)
    mock_sync.return_value = SyncReport(message="Synced 0 units", tenant_id="tenant-a")
    app.dependency_overrides[get_db_engine] = lambda: override

    response = client.post("/sync/tenant-a", headers={"Authorization": "Bearer test-cron-secret"})

    assert response.status_code == 200
    assert mock_sync.call_args.args[0] is override
