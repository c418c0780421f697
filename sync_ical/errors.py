"""
Exception types raised by the calendar sync and export paths.

Routes translate these into HTTP responses; the orchestrator records them per
housing unit instead of letting them escape a sync run.
"""

from __future__ import annotations

from typing import Optional


class CalendarSyncError(Exception):
    """Base class for all calendar synchronization errors."""


class HousingUnitNotFoundError(CalendarSyncError):
    def __init__(self, unit_id: int):
        super().__init__(f"Housing unit {unit_id} not found")
        self.unit_id = unit_id


class FeedNotConfiguredError(CalendarSyncError):
    """The housing unit has no iCal URL, so it is not eligible for import."""

    def __init__(self, unit_id: int):
        super().__init__(f"Housing unit {unit_id} has no iCal URL configured")
        self.unit_id = unit_id


class FeedFetchError(CalendarSyncError):
    """The remote feed could not be downloaded (network failure or non-2xx status)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FeedParseError(CalendarSyncError):
    """The downloaded document is not a readable iCalendar feed."""


class FeedUnauthorizedError(CalendarSyncError):
    """The export token does not match the requested tenant."""


class FeedTokenSecretMissingError(CalendarSyncError):
    """Neither ICAL_SECRET nor CRON_SECRET is configured."""

    def __init__(self) -> None:
        super().__init__("ICAL_SECRET or CRON_SECRET must be set to sign calendar feed tokens")
