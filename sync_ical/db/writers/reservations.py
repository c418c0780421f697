"""
Reservation reconciliation keyed on (housing unit, check-in date, check-out date).

reconcile_reservation() is the single entry point used by the feed importer.
On PostgreSQL it issues one INSERT ... ON CONFLICT DO UPDATE against the
uq_reservations_unit_stay constraint; on other databases, or when that
constraint is missing, it falls back to a lookup followed by an UPDATE or an
INSERT. Both paths write the same columns and report the same outcome.
"""

from __future__ import annotations

import enum
from typing import Any

import structlog
from sqlalchemy import func, insert, literal_column, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import ProgrammingError

from sync_ical.db.readers.reservations import ReservationKey, find_reservation_id
from sync_ical.models.reservations import Reservation

logger = structlog.get_logger(__name__)

# Columns rewritten when an existing reservation is matched by its triple
RECONCILED_COLUMNS = ("guest_name", "guest_count", "platform", "status", "notes")

KEY_COLUMNS = ("housing_unit_id", "check_in_date", "check_out_date")


class ReconcileOutcome(str, enum.Enum):
    CREATED = "created"
    UPDATED = "updated"


def _row(tenant_id: str, key: ReservationKey, fields: dict[str, Any]) -> dict[str, Any]:
    row = {column: fields[column] for column in RECONCILED_COLUMNS}
    row.update(
        tenant_id=tenant_id,
        housing_unit_id=key.housing_unit_id,
        check_in_date=key.check_in_date,
        check_out_date=key.check_out_date,
    )
    return row


def _native_upsert(conn: Connection, row: dict[str, Any]) -> ReconcileOutcome:
    stmt = pg_insert(Reservation).values(row)

    set_dict: dict[str, Any] = {col: getattr(stmt.excluded, col) for col in RECONCILED_COLUMNS}
    set_dict["updated_at"] = func.now()

    # xmax is 0 only on a freshly inserted tuple
    stmt = stmt.on_conflict_do_update(
        index_elements=list(KEY_COLUMNS),
        set_=set_dict,
    ).returning(Reservation.id, literal_column("(xmax = 0)").label("inserted"))

    result = conn.execute(stmt).one()
    return ReconcileOutcome.CREATED if result.inserted else ReconcileOutcome.UPDATED


def _lookup_then_write(
    conn: Connection, key: ReservationKey, row: dict[str, Any]
) -> ReconcileOutcome:
    existing_id = find_reservation_id(conn, key)

    if existing_id is not None:
        conn.execute(
            update(Reservation)
            .where(Reservation.id == existing_id)
            .values({column: row[column] for column in RECONCILED_COLUMNS})
        )
        return ReconcileOutcome.UPDATED

    conn.execute(insert(Reservation).values(row))
    return ReconcileOutcome.CREATED


def reconcile_reservation(
    engine: Engine,
    tenant_id: str,
    key: ReservationKey,
    fields: dict[str, Any],
) -> ReconcileOutcome:
    """
    Create or update the reservation identified by key, in its own transaction.

    Args:
        engine: SQLAlchemy Engine
        tenant_id: Tenant owning the housing unit (written on insert)
        key: (housing_unit_id, check_in_date, check_out_date) triple
        fields: guest_name, guest_count, platform, status and notes

    Returns:
        ReconcileOutcome: CREATED if a new row was inserted, UPDATED otherwise

    Raises:
        sqlalchemy.exc.SQLAlchemyError: If the store rejects the write.

    Example:
        >>> reconcile_reservation(
        ...     engine,
        ...     "tenant-a",
        ...     ReservationKey(7, date(2026, 3, 1), date(2026, 3, 5)),
        ...     {"guest_name": "J. Doe", "guest_count": 1, "platform": "OTHER",
        ...      "status": "CONFIRMED", "notes": "Synced from iCal (UID: x1)"},
        ... )
        <ReconcileOutcome.CREATED: 'created'>
    """
    row = _row(tenant_id, key, fields)

    if engine.dialect.name == "postgresql":
        try:
            with engine.begin() as conn:
                return _native_upsert(conn, row)
        except ProgrammingError as e:
            # Raised when no unique index matches the ON CONFLICT target
            logger.warning(
                "native_upsert_unavailable",
                housing_unit_id=key.housing_unit_id,
                error=str(e.orig) if e.orig is not None else str(e),
            )

    with engine.begin() as conn:
        return _lookup_then_write(conn, key, row)
