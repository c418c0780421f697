import structlog

from sync_ical.config import DRY_RUN
from sync_ical.db.engine import engine
from sync_ical.logging_config import setup_logging
from sync_ical.services.sync import sync_all_tenants

# Setup logging
setup_logging()
logger = structlog.get_logger(__name__)


def main() -> None:
    # Run a full sync across every tenant that has at least one feed configured
    reports = sync_all_tenants(engine, dry_run=DRY_RUN)
    logger.info(
        "scheduled_sync_finished",
        tenants=len(reports),
        units_synced=sum(r.units_synced for r in reports),
        errors=sum(len(r.errors) for r in reports),
    )


if __name__ == "__main__":
    main()
