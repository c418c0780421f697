from typing import Any, Optional

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.engine import Connection

from sync_ical.models.housing_units import HousingUnit

_UNIT_COLUMNS = (
    HousingUnit.id,
    HousingUnit.tenant_id,
    HousingUnit.name,
    HousingUnit.ical_url,
    HousingUnit.ical_last_synced_at,
)


def _has_feed_url() -> ColumnElement[bool]:
    return HousingUnit.ical_url.is_not(None) & (func.trim(HousingUnit.ical_url) != "")


def get_housing_unit(conn: Connection, unit_id: int) -> Optional[dict[str, Any]]:
    """
    Fetch the sync-relevant columns of one housing unit.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        unit_id (int): Housing unit ID.

    Returns:
        Optional[dict]: id, tenant_id, name, ical_url and ical_last_synced_at, or None
    """
    row = conn.execute(select(*_UNIT_COLUMNS).where(HousingUnit.id == unit_id)).mappings().first()
    return dict(row) if row else None


def list_units_with_feed(conn: Connection, tenant_id: str) -> list[dict[str, Any]]:
    """
    List a tenant's housing units that have an iCal URL configured, ordered by id.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        tenant_id (str): Tenant owning the units.

    Returns:
        list[dict]: One dict per eligible unit (same shape as get_housing_unit)
    """
    result = conn.execute(
        select(*_UNIT_COLUMNS)
        .where(HousingUnit.tenant_id == tenant_id, _has_feed_url())
        .order_by(HousingUnit.id)
    )
    return [dict(row) for row in result.mappings()]


def list_tenants_with_feeds(conn: Connection) -> list[str]:
    """
    List tenant IDs owning at least one housing unit with an iCal URL.

    Args:
        conn (Connection): An active SQLAlchemy database connection.

    Returns:
        list[str]: Distinct tenant IDs in ascending order
    """
    result = conn.execute(
        select(HousingUnit.tenant_id).where(_has_feed_url()).distinct().order_by(HousingUnit.tenant_id)
    )
    return list(result.scalars().all())
