"""
Render a tenant's missions and reservations as an RFC 5545 iCalendar feed.

Missions become one-hour timed events. Reservations become all-day events
from check-in (inclusive) to check-out (exclusive), marked TRANSPARENT so they
do not block availability in calendar clients.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Optional

import structlog
from sqlalchemy.engine import Engine

from sync_ical import config
from sync_ical.db.readers.calendar import get_exportable_missions, get_exportable_reservations
from sync_ical.errors import FeedUnauthorizedError
from sync_ical.metrics import feed_exports
from sync_ical.models.missions import MissionStatus, MissionType
from sync_ical.services.feed_token import verify_feed_token
from sync_ical.utils.datetime import as_utc, utc_now

logger = structlog.get_logger(__name__)

CRLF = "\r\n"
MAX_LINE_OCTETS = 75
MISSION_DURATION = timedelta(hours=1)
UNKNOWN_UNIT_NAME = "Unknown unit"

MISSION_TYPE_LABELS = {
    MissionType.CHECKIN.value: "Check-in",
    MissionType.CHECKOUT.value: "Check-out",
    MissionType.CLEANING.value: "Cleaning",
    MissionType.INTERVENTION.value: "Intervention",
    MissionType.EMERGENCY.value: "Emergency",
}


def escape_text(value: str) -> str:
    """
    Escape a TEXT property value.

    Backslash, semicolon, comma and line feed are escaped; every other
    character is left alone except carriage returns. A CRLF pair or a lone
    CR is normalized to a single escaped line feed, so a reader gets "\\n"
    back where the source had "\\r\\n" or "\\r".
    """
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\n")
        .replace("\r", "\n")
        .replace("\n", "\\n")
    )


def fold_line(line: str) -> str:
    """
    Fold a content line into chunks of at most 75 octets.

    Continuation lines start with a single space. Splits never fall inside a
    multi-byte UTF-8 character.
    """
    if len(line.encode("utf-8")) <= MAX_LINE_OCTETS:
        return line

    chunks: List[str] = []
    current = ""
    current_octets = 0
    limit = MAX_LINE_OCTETS

    for char in line:
        char_octets = len(char.encode("utf-8"))
        if current_octets + char_octets > limit:
            chunks.append(current)
            current = ""
            current_octets = 0
            # Continuation lines lose one octet to the leading space
            limit = MAX_LINE_OCTETS - 1
        current += char
        current_octets += char_octets

    chunks.append(current)
    return (CRLF + " ").join(chunks)


def format_date(value: date) -> str:
    return value.strftime("%Y%m%d")


def format_datetime(value: datetime) -> str:
    return as_utc(value).strftime("%Y%m%dT%H%M%SZ")


def _unit_name(row: dict[str, Any]) -> str:
    return row.get("unit_name") or UNKNOWN_UNIT_NAME


def _mission_lines(mission: dict[str, Any], stamp: str) -> List[str]:
    type_label = MISSION_TYPE_LABELS.get(mission["type"], mission["type"])
    start = as_utc(mission["scheduled_at"])
    status = "TENTATIVE" if mission["status"] == MissionStatus.IN_PROGRESS.value else "CONFIRMED"
    summary = f"{type_label} - {_unit_name(mission)}"

    lines = [
        "BEGIN:VEVENT",
        f"UID:mission-{mission['id']}@{config.CALENDAR_UID_DOMAIN}",
        f"DTSTAMP:{stamp}",
        f"DTSTART:{format_datetime(start)}",
        f"DTEND:{format_datetime(start + MISSION_DURATION)}",
        f"SUMMARY:{escape_text(summary)}",
    ]
    if mission.get("notes"):
        lines.append(f"DESCRIPTION:{escape_text(mission['notes'])}")
    lines += [
        f"CATEGORIES:Mission,{escape_text(type_label)}",
        f"STATUS:{status}",
        "END:VEVENT",
    ]
    return lines


def _reservation_lines(reservation: dict[str, Any], stamp: str) -> List[str]:
    summary = f"{reservation['guest_name']} - {_unit_name(reservation)}"
    lines = [
        "BEGIN:VEVENT",
        f"UID:reservation-{reservation['id']}@{config.CALENDAR_UID_DOMAIN}",
        f"DTSTAMP:{stamp}",
        f"DTSTART;VALUE=DATE:{format_date(reservation['check_in_date'])}",
        f"DTEND;VALUE=DATE:{format_date(reservation['check_out_date'])}",
        f"SUMMARY:{escape_text(summary)}",
    ]
    if reservation.get("notes"):
        lines.append(f"DESCRIPTION:{escape_text(reservation['notes'])}")
    lines += [
        "CATEGORIES:Reservation",
        "TRANSP:TRANSPARENT",
        "END:VEVENT",
    ]
    return lines


def render_calendar(
    missions: Iterable[dict[str, Any]],
    reservations: Iterable[dict[str, Any]],
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Serialize missions and reservations into a VCALENDAR document.

    Rows are emitted in the order given. Output only depends on the rows and
    generated_at, which is written to every DTSTAMP.

    Args:
        missions: Rows with id, type, status, scheduled_at, notes, unit_name
        reservations: Rows with id, guest_name, check_in_date, check_out_date, notes, unit_name
        generated_at: Export time (defaults to now)

    Returns:
        str: CRLF-delimited iCalendar text, ending with a CRLF
    """
    stamp = format_datetime(generated_at or utc_now())

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{config.CALENDAR_PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        f"X-WR-CALNAME:{escape_text(config.CALENDAR_NAME)}",
        f"X-WR-TIMEZONE:{config.CALENDAR_TIMEZONE}",
    ]

    for mission in missions:
        lines += _mission_lines(mission, stamp)

    for reservation in reservations:
        lines += _reservation_lines(reservation, stamp)

    lines.append("END:VCALENDAR")

    return CRLF.join(fold_line(line) for line in lines) + CRLF


def export_feed(engine: Engine, tenant_id: str, token: Optional[str]) -> str:
    """
    Build the calendar feed of a tenant after checking its token.

    Args:
        engine: SQLAlchemy Engine
        tenant_id: Tenant whose schedule is exported
        token: Token presented by the calendar client

    Returns:
        str: The complete iCalendar document

    Raises:
        FeedUnauthorizedError: If the token was not issued for this tenant.
        FeedTokenSecretMissingError: If no signing secret is configured.
    """
    if not verify_feed_token(tenant_id, token):
        feed_exports.labels(status="unauthorized").inc()
        raise FeedUnauthorizedError(f"Invalid calendar token for tenant {tenant_id}")

    with engine.connect() as conn:
        missions = get_exportable_missions(conn, tenant_id)
        reservations = get_exportable_reservations(conn, tenant_id)

    document = render_calendar(missions, reservations, generated_at=utc_now())

    feed_exports.labels(status="served").inc()
    logger.info(
        "calendar_exported",
        tenant_id=tenant_id,
        missions_count=len(missions),
        reservations_count=len(reservations),
    )
    return document
