from datetime import datetime

import structlog
from sqlalchemy import update
from sqlalchemy.engine import Connection

from sync_ical.models.housing_units import HousingUnit

logger = structlog.get_logger(__name__)


def update_last_synced(conn: Connection, unit_id: int, synced_at: datetime) -> None:
    """
    Record a successful feed import on a housing unit.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        unit_id (int): Housing unit ID.
        synced_at (datetime): Time of the completed import.
    """
    stmt = (
        update(HousingUnit)
        .where(HousingUnit.id == unit_id)
        .values(ical_last_synced_at=synced_at, updated_at=synced_at)
    )

    conn.execute(stmt)

    logger.debug("unit_last_synced_updated", unit_id=unit_id, synced_at=synced_at.isoformat())
