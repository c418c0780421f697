"""
Shared fixtures for the test suite.

The configuration module refuses to import without DATABASE_URL and
ALLOWED_ORIGINS, so they are set here before anything from sync_ical loads.
"""

from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ALLOWED_ORIGINS"] = "*"
os.environ["CRON_SECRET"] = "test-cron-secret"
os.environ["ICAL_SECRET"] = "test-ical-secret"

from datetime import datetime
from typing import Any, Callable, Generator, Optional

import pytest
from sqlalchemy import insert
from sqlalchemy.engine import Engine

from sync_ical.config import SCHEMA
from sync_ical.db.engine import make_engine
from sync_ical.models.base import Base
from sync_ical.models.housing_units import HousingUnit
from sync_ical.models.missions import Mission
from sync_ical.models.reservations import Reservation


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    """
    Fresh in-memory SQLite database with every table created.

    SQLite has no schemas, so the calsync schema is mapped away.
    """
    engine = make_engine("sqlite://").execution_options(schema_translate_map={SCHEMA: None})
    Base.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def insert_unit(db_engine: Engine) -> Callable[..., int]:
    """Insert a housing unit and return its ID."""

    def _insert(tenant_id: str = "tenant-a", name: str = "Studio A", ical_url: Optional[str] = None) -> int:
        with db_engine.begin() as conn:
            result = conn.execute(
                insert(HousingUnit).values(tenant_id=tenant_id, name=name, ical_url=ical_url)
            )
            return int(result.inserted_primary_key[0])

    return _insert


@pytest.fixture
def insert_reservation(db_engine: Engine) -> Callable[..., int]:
    """Insert a reservation and return its ID."""

    def _insert(**values: Any) -> int:
        row = {
            "tenant_id": "tenant-a",
            "guest_name": "Guest",
            "guest_count": 2,
            "platform": "DIRECT",
            "status": "CONFIRMED",
        }
        row.update(values)
        with db_engine.begin() as conn:
            result = conn.execute(insert(Reservation).values(**row))
            return int(result.inserted_primary_key[0])

    return _insert


@pytest.fixture
def insert_mission(db_engine: Engine) -> Callable[..., int]:
    """Insert a mission and return its ID."""

    def _insert(housing_unit_id: int, scheduled_at: datetime, **values: Any) -> int:
        row = {
            "tenant_id": "tenant-a",
            "housing_unit_id": housing_unit_id,
            "type": "CLEANING",
            "status": "TODO",
            "scheduled_at": scheduled_at,
        }
        row.update(values)
        with db_engine.begin() as conn:
            result = conn.execute(insert(Mission).values(**row))
            return int(result.inserted_primary_key[0])

    return _insert
