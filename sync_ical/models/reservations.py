# models/reservations.py

import enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.sql import func

from sync_ical.config import SCHEMA
from sync_ical.models.base import Base


class BookingPlatform(str, enum.Enum):
    AIRBNB = "AIRBNB"
    BOOKING = "BOOKING"
    DIRECT = "DIRECT"
    OTHER = "OTHER"


class ReservationStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class Reservation(Base):
    """
    ORM model for a guest stay in a housing unit.

    Stays are whole-day ranges: check_in_date is the arrival day and
    check_out_date the departure day. The (housing_unit_id, check_in_date,
    check_out_date) triple identifies a stay imported from an external feed;
    the unique constraint on it is the conflict target of the native upsert.
    """

    __tablename__ = "reservations"
    __table_args__ = (
        UniqueConstraint(
            "housing_unit_id",
            "check_in_date",
            "check_out_date",
            name="uq_reservations_unit_stay",
        ),
        {"schema": SCHEMA},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(String(64), nullable=False, index=True)
    housing_unit_id = Column(
        Integer,
        ForeignKey(f"{SCHEMA}.housing_units.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    guest_name = Column(String(255), nullable=False)
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    guest_count = Column(Integer, nullable=False, default=1)
    platform = Column(String(32), nullable=False, default=BookingPlatform.DIRECT.value)
    status = Column(String(32), nullable=False, default=ReservationStatus.PENDING.value)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
