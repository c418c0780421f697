"""SQLAlchemy model for housing units that may carry an external iCal feed."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from sync_ical.config import SCHEMA
from sync_ical.models.base import Base


class HousingUnit(Base):
    """
    ORM model for a rentable housing unit owned by a tenant.

    Only two columns matter to calendar sync: ical_url (NULL or blank means the
    unit is not eligible for import) and ical_last_synced_at, which the importer
    advances after a successful run. Everything else is owned by the CRUD layer.
    """

    __tablename__ = "housing_units"
    __table_args__ = {"schema": SCHEMA}

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(String(64), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    ical_url = Column(Text, nullable=True)
    ical_last_synced_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
