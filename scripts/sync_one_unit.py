import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse

import structlog

from sync_ical.db.engine import engine
from sync_ical.logging_config import setup_logging
from sync_ical.services.importer import import_for_unit

setup_logging()
logger = structlog.get_logger(__name__)


def main() -> None:
    """
    Import the iCal feed of a single housing unit.
    """
    parser = argparse.ArgumentParser(description="Sync one housing unit from its iCal feed.")
    parser.add_argument("unit_id", type=int, help="Housing unit ID")
    parser.add_argument("--dry-run", action="store_true", help="Only log what would change")
    args = parser.parse_args()

    logger.info("unit_sync_started", unit_id=args.unit_id, dry_run=args.dry_run)

    try:
        result = import_for_unit(engine, args.unit_id, dry_run=args.dry_run)
        logger.info("unit_sync_completed", unit_id=args.unit_id, **result.as_dict())
    except Exception:
        logger.exception("unit_sync_failed", unit_id=args.unit_id)
        raise


if __name__ == "__main__":
    main()
