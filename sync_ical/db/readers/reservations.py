from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from sync_ical.models.reservations import Reservation


@dataclass(frozen=True)
class ReservationKey:
    """Natural key of an imported stay: the unit and its check-in/check-out dates."""

    housing_unit_id: int
    check_in_date: date
    check_out_date: date


def find_reservation_id(conn: Connection, key: ReservationKey) -> Optional[int]:
    """
    Look up the reservation occupying a (unit, check-in, check-out) triple.

    When several rows share the triple (manual entries on a database without
    the unique constraint) the oldest one wins.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        key (ReservationKey): Triple to look up.

    Returns:
        Optional[int]: Reservation ID, or None if the triple is free
    """
    result = conn.execute(
        select(Reservation.id)
        .where(
            Reservation.housing_unit_id == key.housing_unit_id,
            Reservation.check_in_date == key.check_in_date,
            Reservation.check_out_date == key.check_out_date,
        )
        .order_by(Reservation.id)
        .limit(1)
    )
    return result.scalars().first()
