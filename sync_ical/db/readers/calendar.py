"""Queries feeding the calendar export: actionable missions and live reservations."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.engine import Connection

from sync_ical.models.housing_units import HousingUnit
from sync_ical.models.missions import Mission, MissionStatus
from sync_ical.models.reservations import Reservation, ReservationStatus

EXPORTED_MISSION_STATUSES = (MissionStatus.TODO.value, MissionStatus.IN_PROGRESS.value)
EXPORTED_RESERVATION_STATUSES = (
    ReservationStatus.PENDING.value,
    ReservationStatus.CONFIRMED.value,
)


def get_exportable_missions(conn: Connection, tenant_id: str) -> list[dict[str, Any]]:
    """
    Missions still to do or in progress, earliest first, with their unit name.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        tenant_id (str): Tenant whose missions are exported.

    Returns:
        list[dict]: id, type, status, scheduled_at, notes, unit_name
    """
    result = conn.execute(
        select(
            Mission.id,
            Mission.type,
            Mission.status,
            Mission.scheduled_at,
            Mission.notes,
            HousingUnit.name.label("unit_name"),
        )
        .select_from(Mission)
        .outerjoin(HousingUnit, HousingUnit.id == Mission.housing_unit_id)
        .where(
            Mission.tenant_id == tenant_id,
            Mission.status.in_(EXPORTED_MISSION_STATUSES),
        )
        .order_by(Mission.scheduled_at, Mission.id)
    )
    return [dict(row) for row in result.mappings()]


def get_exportable_reservations(conn: Connection, tenant_id: str) -> list[dict[str, Any]]:
    """
    Pending or confirmed reservations ordered by check-in date, with their unit name.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        tenant_id (str): Tenant whose reservations are exported.

    Returns:
        list[dict]: id, guest_name, check_in_date, check_out_date, status, notes, unit_name
    """
    result = conn.execute(
        select(
            Reservation.id,
            Reservation.guest_name,
            Reservation.check_in_date,
            Reservation.check_out_date,
            Reservation.status,
            Reservation.notes,
            HousingUnit.name.label("unit_name"),
        )
        .select_from(Reservation)
        .outerjoin(HousingUnit, HousingUnit.id == Reservation.housing_unit_id)
        .where(
            Reservation.tenant_id == tenant_id,
            Reservation.status.in_(EXPORTED_RESERVATION_STATUSES),
        )
        .order_by(Reservation.check_in_date, Reservation.id)
    )
    return [dict(row) for row in result.mappings()]
