import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from sync_ical.config import SCHEMA
from sync_ical.models.base import Base


class MissionType(str, enum.Enum):
    CHECKIN = "CHECKIN"
    CHECKOUT = "CHECKOUT"
    CLEANING = "CLEANING"
    INTERVENTION = "INTERVENTION"
    EMERGENCY = "EMERGENCY"


class MissionStatus(str, enum.Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class Mission(Base):
    """
    ORM model for an operational task (turnover cleaning, check-in support...)
    scheduled at a point in time for a housing unit.

    Missions have no duration of their own; the calendar export renders them
    as one-hour events.
    """

    __tablename__ = "missions"
    __table_args__ = {"schema": SCHEMA}

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(String(64), nullable=False, index=True)
    housing_unit_id = Column(
        Integer,
        ForeignKey(f"{SCHEMA}.housing_units.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(String(32), nullable=False)
    status = Column(String(32), nullable=False, default=MissionStatus.TODO.value)
    scheduled_at = Column(DateTime(timezone=True), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
