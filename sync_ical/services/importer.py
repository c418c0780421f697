"""Feed importer: bring one housing unit's reservations in line with its external iCal feed."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import structlog
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from sync_ical.db.readers.housing_units import get_housing_unit
from sync_ical.db.readers.reservations import ReservationKey, find_reservation_id
from sync_ical.db.writers.housing_units import update_last_synced
from sync_ical.db.writers.reservations import ReconcileOutcome, reconcile_reservation
from sync_ical.errors import FeedNotConfiguredError, HousingUnitNotFoundError
from sync_ical.metrics import reservations_synced
from sync_ical.models.reservations import BookingPlatform, ReservationStatus
from sync_ical.normalizers.events import SourceEvent
from sync_ical.pollers.feeds import poll_feed
from sync_ical.utils.datetime import utc_now

logger = structlog.get_logger(__name__)

SYNC_NOTE_TEMPLATE = "Synced from iCal (UID: {uid})"


@dataclass
class ImportResult:
    created: int = 0
    updated: int = 0
    skipped: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def reservation_fields(event: SourceEvent) -> dict[str, Any]:
    """Reservation columns written for an imported event."""
    return {
        "guest_name": event.title,
        "guest_count": 1,
        "platform": BookingPlatform.OTHER.value,
        "status": ReservationStatus.CONFIRMED.value,
        "notes": SYNC_NOTE_TEMPLATE.format(uid=event.uid),
    }


def import_for_unit(engine: Engine, unit_id: int, dry_run: bool = False) -> ImportResult:
    """
    Import the external iCal feed of one housing unit.

    Events that ended before now are skipped. The others are reconciled one at
    a time, in feed order, against the reservation holding the same
    (unit, check-in, check-out) triple. A write failure only skips the event
    concerned. Once every event has been handled the unit's
    ical_last_synced_at is set to now, even when the feed had no events.

    Args:
        engine (Engine): SQLAlchemy engine.
        unit_id (int): Housing unit to import.
        dry_run (bool): If True, only report what would be created or updated.

    Returns:
        ImportResult: created / updated / skipped counts.

    Raises:
        HousingUnitNotFoundError: If the unit does not exist.
        FeedNotConfiguredError: If the unit has no iCal URL.
        FeedFetchError: If the feed cannot be downloaded.
        FeedParseError: If the feed is not a readable iCal document.
    """
    with engine.connect() as conn:
        unit = get_housing_unit(conn, unit_id)

    if unit is None:
        raise HousingUnitNotFoundError(unit_id)

    feed_url = (unit["ical_url"] or "").strip()
    if not feed_url:
        raise FeedNotConfiguredError(unit_id)

    log = logger.bind(unit_id=unit_id, tenant_id=unit["tenant_id"], dry_run=dry_run)
    log.info("unit_import_started")

    events = poll_feed(unit_id, feed_url)

    now = utc_now()
    result = ImportResult()
    # Keys a dry run has already counted, so repeats predict an update
    seen_keys: set[ReservationKey] = set()

    for event in events:
        if event.end < now:
            result.skipped += 1
            reservations_synced.labels(outcome="skipped").inc()
            continue

        key = ReservationKey(
            housing_unit_id=unit_id,
            check_in_date=event.check_in_date,
            check_out_date=event.check_out_date,
        )

        if dry_run:
            if key in seen_keys:
                result.updated += 1
                continue
            seen_keys.add(key)
            with engine.connect() as conn:
                existing_id = find_reservation_id(conn, key)
            if existing_id is None:
                result.created += 1
            else:
                result.updated += 1
            continue

        try:
            outcome = reconcile_reservation(
                engine, unit["tenant_id"], key, reservation_fields(event)
            )
        except SQLAlchemyError as e:
            log.error(
                "reservation_write_failed",
                uid=event.uid,
                check_in_date=key.check_in_date.isoformat(),
                check_out_date=key.check_out_date.isoformat(),
                error=str(e),
            )
            result.skipped += 1
            reservations_synced.labels(outcome="failed").inc()
            continue

        if outcome is ReconcileOutcome.CREATED:
            result.created += 1
        else:
            result.updated += 1
        reservations_synced.labels(outcome=outcome.value).inc()

    if dry_run:
        log.info("[DRY RUN] Would reconcile feed events", **result.as_dict())
        return result

    with engine.begin() as conn:
        update_last_synced(conn, unit_id, utc_now())

    log.info("unit_import_completed", events_count=len(events), **result.as_dict())
    return result
