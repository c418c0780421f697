"""
Prometheus metrics for feed imports, reservation reconciliation and calendar exports.

Metrics are exposed via the /metrics endpoint for scraping by Prometheus.

Example:
    >>> from sync_ical.metrics import poll_duration, reservations_synced
    >>> with poll_duration.time():
    ...     events = poll_feed(unit_id, url)
    >>> reservations_synced.labels(outcome="created").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# =============================================================================
# Feed Fetch Metrics
# =============================================================================

feed_requests = Counter(
    "calsync_feed_requests_total",
    "Total HTTP requests made to external iCal feeds",
    ["status_code"],
)
"""
Counter for feed HTTP requests.

Labels:
    status_code: HTTP status code, or "error" when no response was received
"""

feed_latency = Histogram(
    "calsync_feed_latency_seconds",
    "External iCal feed request latency in seconds",
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, float("inf")),
)

# =============================================================================
# Poll Metrics
# =============================================================================

poll_total = Counter(
    "calsync_polls_total",
    "Total number of feed polls (fetch + parse), success and failure",
    ["status"],
)

poll_duration = Histogram(
    "calsync_poll_duration_seconds",
    "Duration of feed polls in seconds",
    buckets=(0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, float("inf")),
)

# =============================================================================
# Sync Metrics
# =============================================================================

reservations_synced = Counter(
    "calsync_reservations_synced_total",
    "Reservations touched by feed imports",
    ["outcome"],
)
"""
Counter for reconciled feed events.

Labels:
    outcome: created, updated, skipped or failed
"""

unit_syncs = Counter(
    "calsync_unit_syncs_total",
    "Housing unit imports run by the orchestrator",
    ["status"],
)

# =============================================================================
# Export Metrics
# =============================================================================

feed_exports = Counter(
    "calsync_feed_exports_total",
    "Calendar feed export requests",
    ["status"],
)
"""
Counter for export requests.

Labels:
    status: served or unauthorized
"""
