"""
Integration tests for the queries behind the calendar export.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable

import pytest
from sqlalchemy.engine import Engine

from sync_ical.db.readers.calendar import get_exportable_missions, get_exportable_reservations
from sync_ical.db.readers.housing_units import (
    get_housing_unit,
    list_tenants_with_feeds,
    list_units_with_feed,
)


@pytest.mark.integration
def test_exportable_missions_filter_and_order(
    db_engine: Engine, insert_unit: Callable[..., int], insert_mission: Callable[..., int]
) -> None:
    unit_id = insert_unit(name="Studio A")
    later = insert_mission(unit_id, datetime(2026, 3, 6, 9, 0, tzinfo=timezone.utc))
    earlier = insert_mission(
        unit_id, datetime(2026, 3, 5, 9, 0, tzinfo=timezone.utc), status="IN_PROGRESS"
    )
    insert_mission(unit_id, datetime(2026, 3, 4, 9, 0, tzinfo=timezone.utc), status="DONE")
    insert_mission(unit_id, datetime(2026, 3, 4, 9, 0, tzinfo=timezone.utc), status="CANCELLED")
    insert_mission(
        unit_id, datetime(2026, 3, 4, 9, 0, tzinfo=timezone.utc), tenant_id="tenant-b"
    )

    with db_engine.connect() as conn:
        missions = get_exportable_missions(conn, "tenant-a")

    assert [m["id"] for m in missions] == [earlier, later]
    assert missions[0]["unit_name"] == "Studio A"
    assert missions[0]["status"] == "IN_PROGRESS"


@pytest.mark.integration
def test_exportable_missions_keep_rows_of_deleted_units(
    db_engine: Engine, insert_mission: Callable[..., int]
) -> None:
    mission_id = insert_mission(9999, datetime(2026, 3, 5, 9, 0, tzinfo=timezone.utc))

    with db_engine.connect() as conn:
        missions = get_exportable_missions(conn, "tenant-a")

    assert [m["id"] for m in missions] == [mission_id]
    assert missions[0]["unit_name"] is None


@pytest.mark.integration
def test_exportable_reservations_filter_and_order(
    db_engine: Engine, insert_unit: Callable[..., int], insert_reservation: Callable[..., int]
) -> None:
    unit_id = insert_unit(name="Loft B")
    april = insert_reservation(
        housing_unit_id=unit_id, check_in_date=date(2026, 4, 1), check_out_date=date(2026, 4, 3)
    )
    march = insert_reservation(
        housing_unit_id=unit_id,
        check_in_date=date(2026, 3, 1),
        check_out_date=date(2026, 3, 5),
        status="PENDING",
    )
    insert_reservation(
        housing_unit_id=unit_id,
        check_in_date=date(2026, 2, 1),
        check_out_date=date(2026, 2, 3),
        status="CANCELLED",
    )
    insert_reservation(
        housing_unit_id=unit_id,
        check_in_date=date(2026, 1, 1),
        check_out_date=date(2026, 1, 3),
        status="COMPLETED",
    )

    with db_engine.connect() as conn:
        reservations = get_exportable_reservations(conn, "tenant-a")

    assert [r["id"] for r in reservations] == [march, april]
    assert reservations[0]["unit_name"] == "Loft B"
    assert reservations[0]["check_in_date"] == date(2026, 3, 1)


@pytest.mark.integration
def test_housing_unit_readers(db_engine: Engine, insert_unit: Callable[..., int]) -> None:
    with_feed = insert_unit(name="A", ical_url="https://feeds.example.com/a.ics")
    insert_unit(name="B", ical_url=None)
    insert_unit(name="C", ical_url="")
    insert_unit(tenant_id="tenant-b", name="D", ical_url="https://feeds.example.com/d.ics")
    insert_unit(tenant_id="tenant-c", name="E", ical_url=" ")

    with db_engine.connect() as conn:
        units = list_units_with_feed(conn, "tenant-a")
        tenants = list_tenants_with_feeds(conn)
        unit = get_housing_unit(conn, with_feed)
        missing = get_housing_unit(conn, 4242)

    assert [u["id"] for u in units] == [with_feed]
    assert tenants == ["tenant-a", "tenant-b"]
    assert unit is not None
    assert unit["tenant_id"] == "tenant-a"
    assert unit["ical_url"] == "https://feeds.example.com/a.ics"
    assert missing is None
