"""Tenant-level sync orchestrator for external iCal feeds."""

import structlog
from sqlalchemy.engine import Engine

from sync_ical.db.readers.housing_units import list_tenants_with_feeds, list_units_with_feed
from sync_ical.metrics import unit_syncs
from sync_ical.schemas.sync import SyncReport, UnitSyncError
from sync_ical.services.importer import import_for_unit

logger = structlog.get_logger(__name__)

NO_FEED_MESSAGE = "No housing unit with an iCal URL configured"


def sync_all_units(engine: Engine, tenant_id: str, dry_run: bool = False) -> SyncReport:
    """
    Run import_for_unit() for every housing unit of a tenant that has a feed.

    Units are processed one after the other. A failing unit is recorded in the
    report's errors and the run moves on to the next unit; its counts are not
    added to the totals and its last-synced timestamp is left untouched.

    Args:
        engine (Engine): SQLAlchemy engine.
        tenant_id (str): Tenant to sync.
        dry_run (bool): If True, do not write to DB.

    Returns:
        SyncReport: Aggregated counts and per-unit errors.
    """
    with engine.connect() as conn:
        units = list_units_with_feed(conn, tenant_id)

    if not units:
        logger.info("tenant_sync_no_units", tenant_id=tenant_id)
        return SyncReport(message=NO_FEED_MESSAGE, tenant_id=tenant_id)

    logger.info("tenant_sync_started", tenant_id=tenant_id, units_count=len(units))

    report = SyncReport(message="", tenant_id=tenant_id)

    for unit in units:
        try:
            result = import_for_unit(engine, unit["id"], dry_run=dry_run)
        except Exception as e:
            logger.exception(
                "unit_sync_failed", tenant_id=tenant_id, unit_id=unit["id"], error=str(e)
            )
            unit_syncs.labels(status="failure").inc()
            report.errors.append(UnitSyncError(unit_id=unit["id"], unit=unit["name"], error=str(e)))
            continue

        unit_syncs.labels(status="success").inc()
        report.units_synced += 1
        report.created += result.created
        report.updated += result.updated
        report.skipped += result.skipped

    report.message = (
        f"Synced {report.units_synced} of {len(units)} housing units: "
        f"{report.created} created, {report.updated} updated, {report.skipped} skipped"
    )

    logger.info(
        "tenant_sync_completed",
        tenant_id=tenant_id,
        units_synced=report.units_synced,
        units_failed=len(report.errors),
        created=report.created,
        updated=report.updated,
        skipped=report.skipped,
    )
    return report


def sync_all_tenants(engine: Engine, dry_run: bool = False) -> list[SyncReport]:
    """
    Run sync_all_units() for every tenant owning at least one configured feed.

    Args:
        engine (Engine): SQLAlchemy engine.
        dry_run (bool): If True, do not write to DB.

    Returns:
        list[SyncReport]: One report per tenant.
    """
    logger.info("sync_all_tenants_started")

    with engine.connect() as conn:
        tenant_ids = list_tenants_with_feeds(conn)

    logger.info("tenants_with_feeds_found", count=len(tenant_ids))

    reports = []
    for tenant_id in tenant_ids:
        try:
            reports.append(sync_all_units(engine, tenant_id, dry_run=dry_run))
        except Exception as e:
            logger.exception("tenant_sync_failed", tenant_id=tenant_id, error=str(e))

    logger.info("sync_all_tenants_completed", total_tenants=len(tenant_ids))
    return reports
