"""
Client module for downloading external iCal feeds with bounded timeouts and
retries on transient failures.
"""

import time
from typing import Optional

import requests
import structlog

from sync_ical.config import FEED_MAX_RETRIES, FEED_TIMEOUT_SECONDS
from sync_ical.errors import FeedFetchError
from sync_ical.metrics import feed_latency, feed_requests

logger = structlog.get_logger(__name__)

RETRY_DELAY = 2.0


def should_retry(res: Optional[requests.Response], err: Optional[Exception]) -> bool:
    """
    Determine whether the request should be retried based on response or error.

    Args:
        res (Optional[requests.Response]): Response object if available.
        err (Optional[Exception]): Exception raised by the request, if any.

    Returns:
        bool: True if the request should be retried, False otherwise.
    """
    if res is not None and res.status_code == 429:
        return True
    if isinstance(err, (requests.Timeout, requests.ConnectionError)):
        return True
    if res is not None and 500 <= res.status_code < 600:
        return True
    return False


def fetch_feed(
    url: str,
    timeout: float = FEED_TIMEOUT_SECONDS,
    max_retries: int = FEED_MAX_RETRIES,
) -> str:
    """
    Download an iCal document.

    The request is sent with no special headers. Timeouts, connection errors,
    429 and 5xx responses are retried up to max_retries times; any other
    non-2xx status fails immediately.

    Args:
        url (str): Feed URL configured on the housing unit.
        timeout (float): Per-request timeout in seconds.
        max_retries (int): Retries after the first attempt.

    Returns:
        str: The response body decoded as text.

    Raises:
        FeedFetchError: If the feed cannot be downloaded.
    """
    retries = 0

    while True:
        res: Optional[requests.Response] = None
        err: Optional[requests.RequestException] = None

        start_time = time.time()
        try:
            res = requests.get(url, timeout=timeout)
        except requests.RequestException as exc:
            err = exc
        feed_latency.observe(time.time() - start_time)
        feed_requests.labels(status_code=str(res.status_code) if res is not None else "error").inc()

        if res is not None and 200 <= res.status_code < 300:
            return res.text

        if retries < max_retries and should_retry(res, err):
            retries += 1
            logger.warning(
                "feed_fetch_retry",
                status_code=res.status_code if res is not None else None,
                error=str(err) if err else None,
                attempt=retries,
            )
            time.sleep(RETRY_DELAY * retries)
            continue

        if err is not None:
            raise FeedFetchError(f"Could not fetch iCal feed: {err}") from err

        status_code = res.status_code if res is not None else None
        raise FeedFetchError(
            f"Could not fetch iCal feed: HTTP {status_code}", status_code=status_code
        )
