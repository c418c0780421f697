from unittest.mock import MagicMock, patch

import pytest

from sync_ical.errors import FeedFetchError, FeedParseError
from sync_ical.pollers.feeds import poll_feed

FEED = (
    "BEGIN:VCALENDAR\r\nVERSION:2.0\r\n"
    "BEGIN:VEVENT\r\nUID:x1\r\nDTSTART;VALUE=DATE:20260301\r\nDTEND;VALUE=DATE:20260305\r\n"
    "SUMMARY:J. Doe\r\nEND:VEVENT\r\n"
    "END:VCALENDAR\r\n"
)


@pytest.mark.unit
@patch("sync_ical.pollers.feeds.fetch_feed")
def test_poll_feed_returns_parsed_events(mock_fetch: MagicMock) -> None:
    """
    Ensure poll_feed fetches the unit's URL and parses the document.
    """
    mock_fetch.return_value = FEED

    events = poll_feed(unit_id=7, url="https://feeds.example.com/a.ics")

    mock_fetch.assert_called_once_with("https://feeds.example.com/a.ics")
    assert [e.uid for e in events] == ["x1"]


@pytest.mark.unit
@patch("sync_ical.pollers.feeds.fetch_feed")
def test_poll_feed_propagates_fetch_errors(mock_fetch: MagicMock) -> None:
    mock_fetch.side_effect = FeedFetchError("Could not fetch iCal feed: HTTP 500", status_code=500)

    with pytest.raises(FeedFetchError):
        poll_feed(unit_id=7, url="https://feeds.example.com/a.ics")


@pytest.mark.unit
@patch("sync_ical.pollers.feeds.fetch_feed")
def test_poll_feed_propagates_parse_errors(mock_fetch: MagicMock) -> None:
    mock_fetch.return_value = "<html>\r\n<body>Gone</body>\r\n</html>\r\n"

    with pytest.raises(FeedParseError):
        poll_feed(unit_id=7, url="https://feeds.example.com/a.ics")
