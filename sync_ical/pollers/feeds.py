import json
from dataclasses import asdict
from typing import List

import structlog

from sync_ical.config import DEBUG
from sync_ical.metrics import poll_duration, poll_total
from sync_ical.network.client import fetch_feed
from sync_ical.normalizers.events import SourceEvent, parse_feed

logger = structlog.get_logger(__name__)


def poll_feed(unit_id: int, url: str) -> List[SourceEvent]:
    """
    Fetch and parse the external iCal feed of one housing unit.

    Args:
        unit_id (int): Housing unit the feed belongs to (for logs only)
        url (str): Feed URL

    Returns:
        list[SourceEvent]: Events in feed order
    """
    with poll_duration.time():
        try:
            raw = fetch_feed(url)
            events = parse_feed(raw)

            if DEBUG and events:
                logger.debug(
                    "Sample event:\n%s", json.dumps(asdict(events[0]), indent=2, default=str)
                )

            logger.info("feed_polled", unit_id=unit_id, events_count=len(events))

            poll_total.labels(status="success").inc()
            return events
        except Exception:
            poll_total.labels(status="failure").inc()
            raise
