"""
Parse an iCalendar document into SourceEvent values.

This is the only module that touches icalendar component objects; everything
downstream works with the small SourceEvent dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, List

import structlog
from icalendar import Calendar

from sync_ical.errors import FeedParseError
from sync_ical.utils.datetime import as_utc, start_of_day_utc

logger = structlog.get_logger(__name__)

DEFAULT_EVENT_TITLE = "Reservation"


@dataclass(frozen=True)
class SourceEvent:
    """One bookable period read from an external feed."""

    uid: str
    title: str
    start: datetime
    end: datetime

    @property
    def check_in_date(self) -> date:
        return self.start.date()

    @property
    def check_out_date(self) -> date:
        return self.end.date()


def _to_utc_instant(value: Any) -> datetime:
    # datetime is a subclass of date, so test it first
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return start_of_day_utc(value)
    raise FeedParseError(f"Unsupported date value in feed: {value!r}")


def _event_end(component: Any, start_value: Any) -> Any:
    dtend = component.get("DTEND")
    if dtend is not None:
        return dtend.dt

    duration = component.get("DURATION")
    if duration is not None:
        return start_value + duration.dt

    # RFC 5545: a date-only start without end lasts one day, a timed one is instantaneous
    if isinstance(start_value, datetime):
        return start_value
    return start_value + timedelta(days=1)


def parse_feed(ical_text: str) -> List[SourceEvent]:
    """
    Parse a VCALENDAR document into a list of SourceEvent, in feed order.

    All-day values become midnight UTC, floating times are read as UTC and
    zoned times are converted to UTC.

    Args:
        ical_text: Raw iCalendar text as downloaded.

    Returns:
        List of SourceEvent, one per VEVENT.

    Raises:
        FeedParseError: If the document is not a readable VCALENDAR or an
            event has no DTSTART.
    """
    try:
        calendar = Calendar.from_ical(ical_text)
    except Exception as e:
        raise FeedParseError(f"Invalid iCal document: {e}") from e

    if getattr(calendar, "name", None) != "VCALENDAR":
        raise FeedParseError("Invalid iCal document: missing VCALENDAR")

    events: List[SourceEvent] = []
    for component in calendar.walk("VEVENT"):
        uid = str(component.get("UID", ""))

        dtstart = component.get("DTSTART")
        if dtstart is None:
            raise FeedParseError(f"Event {uid or '<no UID>'} has no DTSTART")

        try:
            start_value = dtstart.dt
            end_value = _event_end(component, start_value)
            start = _to_utc_instant(start_value)
            end = _to_utc_instant(end_value)
        except FeedParseError:
            raise
        except Exception as e:
            raise FeedParseError(f"Event {uid or '<no UID>'} has invalid dates: {e}") from e

        summary = str(component.get("SUMMARY", ""))
        title = summary if summary.strip() else DEFAULT_EVENT_TITLE
        events.append(SourceEvent(uid=uid, title=title, start=start, end=end))

    logger.debug("feed_parsed", events_count=len(events))
    return events
